# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Pydantic model of a set of normalised filter coefficients."""

import numpy as np
import numpy.typing as npt
import scipy.signal as spsig
from pydantic import Field

from biquad_dsp.models.fields import Float32, Float32Model


class FilterCoefficients(Float32Model):
    """
    Normalised biquad filter coefficients.

    The coefficients describe the transfer function
    `H(z) = (a0 + a1*z^-1 + a2*z^-2) / (1 + b1*z^-1 + b2*z^-2)`, so the
    leading denominator coefficient is always 1 and is not stored.
    The default values are the bypass coefficients ``(1, 0, 0, 0, 0)``.

    Attributes
    ----------
    a0, a1, a2 : float
        Numerator (feedforward) coefficients.
    b1, b2 : float
        Denominator (feedback) coefficients.
    """

    a0: Float32 = Field(default=1.0, description="Coefficient a0 / b0.")
    a1: Float32 = Field(default=0.0, description="Coefficient a1 / b0.")
    a2: Float32 = Field(default=0.0, description="Coefficient a2 / b0.")
    b1: Float32 = Field(default=0.0, description="Coefficient b1 / b0.")
    b2: Float32 = Field(default=0.0, description="Coefficient b2 / b0.")

    @classmethod
    def bypass(cls) -> "FilterCoefficients":
        """Return the identity coefficients, output = input."""
        return cls()

    def to_ba(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Return the numerator and denominator polynomials.

        Returns
        -------
        tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]
            ``b = [a0, a1, a2]`` and ``a = [1, b1, b2]``, in the form
            expected by ``scipy.signal``.
        """
        b = np.array([self.a0, self.a1, self.a2], dtype=np.float64)
        a = np.array([1.0, self.b1, self.b2], dtype=np.float64)
        return b, a

    def freq_response(
        self, fs: float, nfft: int = 1024
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.complex128]]:
        """
        Calculate the frequency response of the coefficients.

        Parameters
        ----------
        fs : float
            The sample rate in Hz.
        nfft : int | array_like
            The number of points to compute between 0 and fs/2, or an
            array of frequencies in Hz, by default 1024.

        Returns
        -------
        tuple[npt.NDArray[np.float64], npt.NDArray[np.complex128]]
            A tuple containing the frequency vector and the complex
            frequency response.
        """
        b, a = self.to_ba()
        f, h = spsig.freqz(b, a, worN=nfft, fs=fs)
        return f, h
