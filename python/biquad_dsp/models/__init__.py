# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""The pydantic models of the filter types, coefficients and configuration."""

from .fields import (
    FILTER_TYPES,
    AllPass,
    BandPass,
    Bypass,
    FilterParameters,
    Float32Model,
    FirstOrderAllPass,
    FirstOrderHighPass,
    FirstOrderHighShelf,
    FirstOrderLowPass,
    FirstOrderLowShelf,
    HighPass,
    HighShelf,
    LowPass,
    LowShelf,
    Notch,
    OnePoleLowPass,
    PeakingEq,
    parse_filter_type,
)
from .coefficients import FilterCoefficients
from .biquad import BiquadParameters
