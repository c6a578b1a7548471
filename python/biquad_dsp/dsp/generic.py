# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""The generic filter block."""

from collections.abc import MutableSequence

import numpy as np
import numpy.typing as npt
from docstring_inheritance import NumpyDocstringInheritanceInitMeta

from biquad_dsp.models.coefficients import FilterCoefficients


class dsp_block(metaclass=NumpyDocstringInheritanceInitMeta):
    """
    Generic filter block, the filter realizations inherit from this
    class and implement ``process_sample`` and ``reset_state``.

    By using the metaclass NumpyDocstringInheritanceInitMeta, parameter
    and attribute documentation can be inherited by the child classes.

    The coefficients are held as float32 scalars, and all processing is
    done in float32. Replacing the coefficients does not clear the
    filter state.

    Parameters
    ----------
    coeffs : FilterCoefficients, optional
        The initial coefficients. Defaults to bypass.
    """

    def __init__(self, coeffs: FilterCoefficients | None = None):
        self.set_coefficients(coeffs if coeffs is not None else FilterCoefficients.bypass())

    @property
    def coeffs(self) -> FilterCoefficients:
        """The currently installed coefficients."""
        return self._coeffs

    def set_coefficients(self, coeffs: FilterCoefficients):
        """Replace the coefficients. The filter state is not changed.

        Parameters
        ----------
        coeffs : FilterCoefficients
            The new coefficients.
        """
        self._coeffs = coeffs
        self._a0 = np.float32(coeffs.a0)
        self._a1 = np.float32(coeffs.a1)
        self._a2 = np.float32(coeffs.a2)
        self._b1 = np.float32(coeffs.b1)
        self._b2 = np.float32(coeffs.b2)

    def reset(self):
        """
        Reset the filter to bypass by installing the bypass
        coefficients.

        The saved states are not cleared, use ``reset_state`` for that.
        """
        self.set_coefficients(FilterCoefficients.bypass())

    def reset_state(self):
        """Reset the saved states to zero. The coefficients are not changed."""
        raise NotImplementedError

    def process_sample(self, sample: float) -> np.float32:
        """
        Take one new sample and return the filtered sample.

        Parameters
        ----------
        sample : float
            The input sample to be processed.

        Returns
        -------
        np.float32
            The processed sample.
        """
        raise NotImplementedError

    def process_block(self, samples: MutableSequence) -> MutableSequence:
        """
        Filter a block of samples in place.

        Each sample is passed through ``process_sample`` in order and
        overwritten with the result.

        Parameters
        ----------
        samples : MutableSequence
            The samples to be processed, e.g. a list or a 1-D numpy
            array. Numpy arrays must have a floating point dtype.

        Returns
        -------
        MutableSequence
            The same ``samples`` object, now holding the processed samples.

        Raises
        ------
        TypeError
            If ``samples`` is a numpy array without a floating point
            dtype, which would truncate the output.
        """
        if isinstance(samples, np.ndarray) and not np.issubdtype(samples.dtype, np.floating):
            raise TypeError(f"samples must be a floating point array, not {samples.dtype}")
        for n in range(len(samples)):
            samples[n] = self.process_sample(samples[n])
        return samples

    def freq_response(
        self, fs: float, nfft: int = 1024
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.complex128]]:
        """
        Calculate the frequency response of the installed coefficients.

        Parameters
        ----------
        fs : float
            The sample rate in Hz.
        nfft : int
            The number of points to compute in the frequency response,
            by default 1024.

        Returns
        -------
        tuple[npt.NDArray[np.float64], npt.NDArray[np.complex128]]
            A tuple containing the frequency vector and the complex
            frequency response.
        """
        return self._coeffs.freq_response(fs, nfft)
