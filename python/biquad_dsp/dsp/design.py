# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""
Filter coefficient design.

All the designs are bilinear transform designs using the pre-warped
frequency ``k = tan(pi*freq*sample_time)``, apart from the one pole
low pass, which places a single real pole at
``exp(-2*pi*freq*sample_time)``.

The calculations are done in float32. There is no parameter checking:
a frequency at or above fs/2, or a Q <= 0, will give a degenerate or
non-finite set of coefficients rather than an error.

The shelf and peaking designs branch on the sign of the gain: for a
boost the gain factor is applied to the numerator, for a cut it is
applied to the denominator. This keeps a cut the exact inverse of the
equivalent boost.
"""

from functools import wraps

import numpy as np

from biquad_dsp.dsp.utils import f32
from biquad_dsp.models import fields
from biquad_dsp.models.coefficients import FilterCoefficients

PI = f32(np.pi)
SQRT2 = f32(np.sqrt(2.0))


def _ignore_fp_errors(func):
    """Run a design with numpy floating point errors ignored, so bad
    parameters give non-finite coefficients rather than warnings or
    exceptions.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(all="ignore"):
            return func(*args, **kwargs)

    return wrapper


def _coeffs(a0, a1, a2, b1, b2) -> FilterCoefficients:
    return FilterCoefficients(
        a0=float(a0), a1=float(a1), a2=float(a2), b1=float(b1), b2=float(b2)
    )


def _prewarp(freq: float, sample_time: float) -> np.float32:
    return np.tan(PI * f32(freq) * f32(sample_time))


def _gain_factor(gain_db: float) -> np.float32:
    return f32(10.0) ** (np.abs(f32(gain_db)) / f32(20.0))


def make_bypass(sample_time: float) -> FilterCoefficients:
    """
    Create bypass coefficients. Only the a0 coefficient is set.

    Parameters
    ----------
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    return FilterCoefficients.bypass()


@_ignore_fp_errors
def make_lowpass(freq: float, q: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order low pass filter.

    Parameters
    ----------
    freq : float
        The cutoff frequency of the filter in Hz.
    q : float
        The Q factor of the filter.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    q = f32(q)
    norm = 1.0 / (1.0 + k / q + k * k)
    a0 = k * k * norm
    return _coeffs(
        a0,
        2.0 * a0,
        a0,
        2.0 * (k * k - 1.0) * norm,
        (1.0 - k / q + k * k) * norm,
    )


@_ignore_fp_errors
def make_highpass(freq: float, q: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order high pass filter.

    Parameters
    ----------
    freq : float
        The cutoff frequency of the filter in Hz.
    q : float
        The Q factor of the filter.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    q = f32(q)
    norm = 1.0 / (1.0 + k / q + k * k)
    a0 = norm
    return _coeffs(
        a0,
        -2.0 * a0,
        a0,
        2.0 * (k * k - 1.0) * norm,
        (1.0 - k / q + k * k) * norm,
    )


# Constant 0 dB peak gain
@_ignore_fp_errors
def make_bandpass(freq: float, q: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order band pass filter.

    The gain at the centre frequency is 0 dB.

    Parameters
    ----------
    freq : float
        The centre frequency of the filter in Hz.
    q : float
        The Q factor of the filter.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    q = f32(q)
    norm = 1.0 / (1.0 + k / q + k * k)
    a0 = k / q * norm
    return _coeffs(
        a0,
        0.0,
        -a0,
        2.0 * (k * k - 1.0) * norm,
        (1.0 - k / q + k * k) * norm,
    )


@_ignore_fp_errors
def make_notch(freq: float, q: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order notch filter.

    Parameters
    ----------
    freq : float
        The centre frequency of the notch in Hz.
    q : float
        The Q factor of the filter.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    q = f32(q)
    norm = 1.0 / (1.0 + k / q + k * k)
    a0 = (1.0 + k * k) * norm
    a1 = 2.0 * (k * k - 1.0) * norm
    return _coeffs(a0, a1, a0, a1, (1.0 - k / q + k * k) * norm)


@_ignore_fp_errors
def make_allpass(freq: float, q: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order all pass filter.

    The numerator mirrors the denominator, ``a0 = b2`` and ``a1 = b1``,
    with ``a2`` fixed to 1.

    Parameters
    ----------
    freq : float
        The centre frequency of the filter in Hz.
    q : float
        The Q factor of the filter.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    div_q = 1.0 / f32(q)
    norm = 1.0 / (1.0 + k * div_q + k * k)
    a0 = (1.0 - k * div_q + k * k) * norm
    a1 = 2.0 * (k * k - 1.0) * norm
    # a2 is left unnormalised at 1
    return _coeffs(a0, a1, 1.0, a1, a0)


@_ignore_fp_errors
def make_peaking(freq: float, q: float, gain_db: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a peaking EQ filter.

    Parameters
    ----------
    freq : float
        The centre frequency of the filter in Hz.
    q : float
        The Q factor of the filter.
    gain_db : float
        The gain at the centre frequency in dB.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    q = f32(q)
    v = _gain_factor(gain_db)

    if gain_db >= 0:
        norm = 1.0 / (1.0 + 1.0 / q * k + k * k)
        a1 = 2.0 * (k * k - 1.0) * norm
        return _coeffs(
            (1.0 + v / q * k + k * k) * norm,
            a1,
            (1.0 - v / q * k + k * k) * norm,
            a1,
            (1.0 - 1.0 / q * k + k * k) * norm,
        )
    else:
        norm = 1.0 / (1.0 + v / q * k + k * k)
        a1 = 2.0 * (k * k - 1.0) * norm
        return _coeffs(
            (1.0 + 1.0 / q * k + k * k) * norm,
            a1,
            (1.0 - 1.0 / q * k + k * k) * norm,
            a1,
            (1.0 - v / q * k + k * k) * norm,
        )


@_ignore_fp_errors
def make_lowshelf(freq: float, gain_db: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order low shelf filter.

    The shelf has a Butterworth (maximally flat) response, the gain
    below the corner frequency tends to ``gain_db``.

    Parameters
    ----------
    freq : float
        The corner frequency of the shelf in Hz.
    gain_db : float
        The shelf gain in dB.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    v = _gain_factor(gain_db)
    sqrt_2v = np.sqrt(2.0 * v)

    if gain_db >= 0:
        norm = 1.0 / (1.0 + SQRT2 * k + k * k)
        return _coeffs(
            (1.0 + sqrt_2v * k + v * k * k) * norm,
            2.0 * (v * k * k - 1.0) * norm,
            (1.0 - sqrt_2v * k + v * k * k) * norm,
            2.0 * (k * k - 1.0) * norm,
            (1.0 - SQRT2 * k + k * k) * norm,
        )
    else:
        norm = 1.0 / (1.0 + sqrt_2v * k + v * k * k)
        return _coeffs(
            (1.0 + SQRT2 * k + k * k) * norm,
            2.0 * (k * k - 1.0) * norm,
            (1.0 - SQRT2 * k + k * k) * norm,
            2.0 * (v * k * k - 1.0) * norm,
            (1.0 - sqrt_2v * k + v * k * k) * norm,
        )


@_ignore_fp_errors
def make_highshelf(freq: float, gain_db: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a second order high shelf filter.

    The shelf has a Butterworth (maximally flat) response, the gain
    above the corner frequency tends to ``gain_db``.

    Parameters
    ----------
    freq : float
        The corner frequency of the shelf in Hz.
    gain_db : float
        The shelf gain in dB.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    v = _gain_factor(gain_db)
    sqrt_2v = np.sqrt(2.0 * v)

    if gain_db >= 0:
        norm = 1.0 / (1.0 + SQRT2 * k + k * k)
        return _coeffs(
            (v + sqrt_2v * k + k * k) * norm,
            2.0 * (k * k - v) * norm,
            (v - sqrt_2v * k + k * k) * norm,
            2.0 * (k * k - 1.0) * norm,
            (1.0 - SQRT2 * k + k * k) * norm,
        )
    else:
        norm = 1.0 / (v + sqrt_2v * k + k * k)
        return _coeffs(
            (1.0 + SQRT2 * k + k * k) * norm,
            2.0 * (k * k - 1.0) * norm,
            (1.0 - SQRT2 * k + k * k) * norm,
            2.0 * (k * k - v) * norm,
            (v - sqrt_2v * k + k * k) * norm,
        )


@_ignore_fp_errors
def make_first_order_lowpass(freq: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a first order low pass filter.

    Parameters
    ----------
    freq : float
        The cutoff frequency of the filter in Hz.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    norm = 1.0 / (1.0 / k + 1.0)
    return _coeffs(norm, norm, 0.0, (1.0 - 1.0 / k) * norm, 0.0)


@_ignore_fp_errors
def make_first_order_highpass(freq: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a first order high pass filter.

    Parameters
    ----------
    freq : float
        The cutoff frequency of the filter in Hz.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    norm = 1.0 / (k + 1.0)
    return _coeffs(norm, -norm, 0.0, (k - 1.0) * norm, 0.0)


@_ignore_fp_errors
def make_first_order_lowshelf(
    freq: float, gain_db: float, sample_time: float
) -> FilterCoefficients:
    """Create coefficients for a first order low shelf filter.

    Parameters
    ----------
    freq : float
        The corner frequency of the shelf in Hz.
    gain_db : float
        The shelf gain in dB.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    v = _gain_factor(gain_db)

    if gain_db >= 0:
        norm = 1.0 / (k + 1.0)
        return _coeffs((k * v + 1.0) * norm, (k * v - 1.0) * norm, 0.0, (k - 1.0) * norm, 0.0)
    else:
        norm = 1.0 / (k * v + 1.0)
        return _coeffs((k + 1.0) * norm, (k - 1.0) * norm, 0.0, (k * v - 1.0) * norm, 0.0)


@_ignore_fp_errors
def make_first_order_highshelf(
    freq: float, gain_db: float, sample_time: float
) -> FilterCoefficients:
    """Create coefficients for a first order high shelf filter.

    Parameters
    ----------
    freq : float
        The corner frequency of the shelf in Hz.
    gain_db : float
        The shelf gain in dB.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    v = _gain_factor(gain_db)

    if gain_db >= 0:
        norm = 1.0 / (k + 1.0)
        return _coeffs((k + v) * norm, (k - v) * norm, 0.0, (k - 1.0) * norm, 0.0)
    else:
        norm = 1.0 / (k + v)
        return _coeffs((k + 1.0) * norm, (k - 1.0) * norm, 0.0, (k - v) * norm, 0.0)


@_ignore_fp_errors
def make_first_order_allpass(freq: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a first order all pass filter.

    Parameters
    ----------
    freq : float
        The centre frequency of the filter in Hz, where the phase shift
        is 90 degrees.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    k = _prewarp(freq, sample_time)
    a0 = (1.0 - k) / (1.0 + k)
    return _coeffs(a0, -1.0, 0.0, -a0, 0.0)


@_ignore_fp_errors
def make_one_pole_lowpass(freq: float, sample_time: float) -> FilterCoefficients:
    """Create coefficients for a one pole low pass filter.

    This is an exponential moving average, the pole is placed directly
    at ``exp(-2*pi*freq*sample_time)`` without frequency pre-warping.

    Parameters
    ----------
    freq : float
        The cutoff frequency of the filter in Hz.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.
    """
    pole = np.exp(-2.0 * PI * f32(freq) * f32(sample_time))
    return _coeffs(1.0 - pole, 0.0, 0.0, -pole, 0.0)


_DESIGNS = {
    fields.Bypass: make_bypass,
    fields.LowPass: make_lowpass,
    fields.HighPass: make_highpass,
    fields.BandPass: make_bandpass,
    fields.Notch: make_notch,
    fields.PeakingEq: make_peaking,
    fields.LowShelf: make_lowshelf,
    fields.HighShelf: make_highshelf,
    fields.AllPass: make_allpass,
    fields.FirstOrderLowPass: make_first_order_lowpass,
    fields.FirstOrderHighPass: make_first_order_highpass,
    fields.FirstOrderLowShelf: make_first_order_lowshelf,
    fields.FirstOrderHighShelf: make_first_order_highshelf,
    fields.FirstOrderAllPass: make_first_order_allpass,
    fields.OnePoleLowPass: make_one_pole_lowpass,
}


def derive(filter_type: fields.FilterParameters, sample_time: float) -> FilterCoefficients:
    """
    Calculate the normalised coefficients for a filter type.

    Parameters
    ----------
    filter_type : biquad_dsp.models.fields.FilterParameters
        The filter type and its parameters, e.g.
        ``LowPass(freq=1000, q=0.707)``.
    sample_time : float
        The sample period, ``1 / fs``.

    Returns
    -------
    FilterCoefficients
        The normalised filter coefficients.

    Raises
    ------
    TypeError
        If filter_type is not one of the filter types in
        ``biquad_dsp.models.fields``.
    """
    try:
        design = _DESIGNS[type(filter_type)]
    except KeyError:
        raise TypeError(f"unknown filter type {type(filter_type).__name__}") from None

    return design(**filter_type.model_dump(exclude={"type"}), sample_time=sample_time)
