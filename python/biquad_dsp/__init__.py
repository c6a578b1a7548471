# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""
The biquad filter Python library.

For designing normalised biquad and first order filter coefficients,
and running them through direct form 1 or transposed direct form 2
filters in float32.
"""

from importlib import metadata as _metadata

__version__ = _metadata.version("biquad_dsp")
