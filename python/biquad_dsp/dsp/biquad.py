# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""The biquad filter realizations."""

import numpy as np

from biquad_dsp.dsp import design
from biquad_dsp.dsp import generic as dspg
from biquad_dsp.dsp import utils
from biquad_dsp.models.biquad import BiquadParameters
from biquad_dsp.models.coefficients import FilterCoefficients
from biquad_dsp.models.fields import OnePoleLowPass


class biquad_df1(dspg.dsp_block):
    """
    A second order biquadratic filter using direct form 1.

    The output is calculated from the current and two previous inputs,
    and the two previous outputs:
    `y[n] = a0*x[n] + a1*x[n-1] + a2*x[n-2] - b1*y[n-1] - b2*y[n-2]`

    The saved states are the raw input and output history.
    """

    def __init__(self, coeffs: FilterCoefficients | None = None):
        self.reset_state()
        super().__init__(coeffs)

    def reset_state(self):
        """Reset the saved input and output history to zero."""
        self._x1 = np.float32(0)
        self._x2 = np.float32(0)
        self._y1 = np.float32(0)
        self._y2 = np.float32(0)

    def process_sample(self, sample: float) -> np.float32:
        """
        Filter a single sample using direct form 1 biquad using float32
        maths.
        """
        x = np.float32(sample)
        y = (
            self._a0 * x
            + self._a1 * self._x1
            + self._a2 * self._x2
            - self._b1 * self._y1
            - self._b2 * self._y2
        )

        self._x2 = self._x1
        self._x1 = x
        self._y2 = self._y1
        self._y1 = y

        return y


class biquad_df2t(dspg.dsp_block):
    """
    A second order biquadratic filter using transposed direct form 2.

    The output is calculated using two state registers:
    `y[n] = a0*x[n] + s0`, then `s0 = s1 + a1*x[n] - b1*y[n]` and
    `s1 = a2*x[n] - b2*y[n]`.

    The states are intermediate sums rather than past samples. This
    structure holds half the state of direct form 1 and has lower round
    off error when the coefficients are changed while running.
    """

    def __init__(self, coeffs: FilterCoefficients | None = None):
        self.reset_state()
        super().__init__(coeffs)

    def reset_state(self):
        """Reset the state registers to zero."""
        self._s0 = np.float32(0)
        self._s1 = np.float32(0)

    def process_sample(self, sample: float) -> np.float32:
        """
        Filter a single sample using transposed direct form 2 biquad
        using float32 maths.
        """
        x = np.float32(sample)
        y = self._s0 + self._a0 * x

        self._s0 = self._s1 + self._a1 * x - self._b1 * y
        self._s1 = self._a2 * x - self._b2 * y

        return y


_STRUCTURES = {
    "df1": biquad_df1,
    "df2t": biquad_df2t,
}


def biquad_from_parameters(params: BiquadParameters) -> dspg.dsp_block:
    """
    Return a biquad object configured from a set of parameters.

    The coefficients are derived for ``params.fs``. A warning is raised
    if the filter frequency is not below fs/2, or if the resulting
    filter is unstable, but the filter is still returned. The one pole
    low pass is not pre-warped, so its frequency is not checked.

    Parameters
    ----------
    params : BiquadParameters
        The filter type, realization structure and sample rate.

    Returns
    -------
    biquad_df1 | biquad_df2t
        The configured filter.
    """
    freq = getattr(params.filter_type, "freq", None)
    if freq is not None and not isinstance(params.filter_type, OnePoleLowPass):
        utils.check_filter_freq(freq, params.fs)

    coeffs = design.derive(params.filter_type, 1.0 / params.fs)
    utils.check_stability(coeffs)

    return _STRUCTURES[params.structure](coeffs)
