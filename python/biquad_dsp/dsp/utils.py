# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Utility functions used by the filter design and DSP blocks."""

import warnings

import numpy as np

from biquad_dsp.models.coefficients import FilterCoefficients

FLT_MIN = np.finfo(float).tiny


class NyquistWarning(UserWarning):
    """A warning for a filter frequency at or above half the sample rate."""

    pass


class UnstableFilterWarning(UserWarning):
    """A warning for filter poles on or outside the unit circle."""

    pass


def db(input):
    """Convert an amplitude to decibels (20*log10(abs(x)))."""
    out = 20 * np.log10(np.abs(input) + FLT_MIN)
    return out


def f32(val) -> np.float32:
    """Cast a value to a float32 scalar."""
    return np.float32(val)


def check_filter_freq(filter_freq: float, fs: float) -> bool:
    """
    Check the filter frequency is below fs/2, warn if it is not.

    The frequency is not altered, a frequency at or above fs/2 will
    give an undefined filter shape.

    Returns
    -------
    bool
        True if the frequency is valid.
    """
    if filter_freq >= fs / 2:
        warnings.warn(
            f"filter frequency ({filter_freq:.1f} Hz) must be less than fs/2 ({fs / 2:.1f} Hz)",
            NyquistWarning,
        )
        return False
    return True


def check_stability(coeffs: FilterCoefficients) -> bool:
    """
    Check the poles of the filter are inside the unit circle, warn if
    they are not.

    Returns
    -------
    bool
        True if the filter is stable.
    """
    _, a = coeffs.to_ba()
    if not np.all(np.isfinite(a)):
        warnings.warn("filter coefficients are not finite", UnstableFilterWarning)
        return False

    poles = np.roots(a)
    if np.any(np.abs(poles) >= 1):
        warnings.warn(
            "poles lie on or outside the unit circle, the filter is unstable",
            UnstableFilterWarning,
        )
        return False
    return True
