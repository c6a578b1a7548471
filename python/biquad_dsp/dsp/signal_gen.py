# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Signal generators for exercising the filters."""

import numpy as np
import scipy.signal as spsig

# These functions return float32 signals, matching the precision of the
# filter realizations.


def impulse(length: int, amplitude: float = 1.0) -> np.ndarray:
    """
    Generate a unit impulse, ``[amplitude, 0, 0, ...]``.

    Parameters
    ----------
    length : int
        The number of samples.
    amplitude : float, optional
        The value of the first sample, by default 1.0.

    Returns
    -------
    np.ndarray
        The impulse signal.
    """
    signal = np.zeros(length, dtype=np.float32)
    signal[0] = amplitude
    return signal


def step(length: int, amplitude: float = 1.0) -> np.ndarray:
    """Generate a step, ``length`` samples of ``amplitude``."""
    return np.full(length, amplitude, dtype=np.float32)


def sin(fs: float, length: float, freq: float, amplitude: float) -> np.ndarray:
    """
    Generate a sinusoidal signal.

    Parameters
    ----------
    fs : float
        The sampling frequency in Hz.
    length : float
        The duration of the signal in seconds.
    freq : float
        The frequency of the sinusoid in Hz.
    amplitude : float
        The amplitude of the sinusoid.

    Returns
    -------
    np.ndarray
        The generated sinusoidal signal.
    """
    t = np.arange(int(fs * length)) / fs
    signal = amplitude * np.sin(2 * np.pi * freq * t)
    return signal.astype(np.float32)


def log_chirp(
    fs: float,
    length: float,
    amplitude: float,
    start: float = 20,
    stop: float = 20000,
) -> np.ndarray:
    """
    Generate a logarithmic chirp signal.

    Parameters
    ----------
    fs : float
        The sample rate of the signal.
    length : float
        The duration of the signal in seconds.
    amplitude : float
        The amplitude of the signal.
    start : float, optional
        The starting frequency of the chirp signal in Hz. Default is
        20 Hz.
    stop : float, optional
        The ending frequency of the chirp signal in Hz. Default is
        20000 Hz.

    Returns
    -------
    np.ndarray
        The generated logarithmic chirp signal as a NumPy array.
    """
    t = np.arange(int(fs * length)) / fs
    signal = amplitude * spsig.chirp(t, start, length, stop, "log", phi=-90)
    return signal.astype(np.float32)
