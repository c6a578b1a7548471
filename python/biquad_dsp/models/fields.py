# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Pydantic models of the different filter types."""

from functools import partial
from typing import Annotated, Literal, Union

import numpy as np
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter


def _to_float32(value: float) -> float:
    """Round a float to the nearest float32, returned as a Python float."""
    return float(np.float32(value))


# A float that is held at float32 precision. A float32 is exactly
# representable as a double, so these round-trip through JSON bit-for-bit.
Float32 = Annotated[float, AfterValidator(_to_float32)]

# no range constraints are applied to the filter parameters, out of range
# values give a degenerate filter rather than an error
DEFAULT_FILTER_FREQ = partial(Field, default=1000.0, description="Frequency of the filter in Hz.")
DEFAULT_Q = partial(Field, default=0.707, description="Q factor of the filter.")
DEFAULT_GAIN_DB = partial(Field, default=0.0, description="Gain of the filter in dB.")


class Float32Model(BaseModel):
    """
    The pydantic model for immutable sets of float32 values.

    Defaults are validated so they are rounded to float32 like any
    other value. NaN and infinity are written to JSON as the
    ``NaN``/``Infinity`` constants so that degenerate values can be
    decoded again.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, ser_json_inf_nan="constants"
    )


class FilterParameters(Float32Model):
    """The pydantic model all filter types inherit from."""


class Bypass(FilterParameters):
    """Parameters for a bypass filter, output = input."""

    type: Literal["Bypass"] = "Bypass"


class LowPass(FilterParameters):
    """Parameters for a second order low pass filter."""

    type: Literal["LowPass"] = "LowPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()


class HighPass(FilterParameters):
    """Parameters for a second order high pass filter."""

    type: Literal["HighPass"] = "HighPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()


class BandPass(FilterParameters):
    """Parameters for a second order band pass filter with 0 dB peak gain."""

    type: Literal["BandPass"] = "BandPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()


class Notch(FilterParameters):
    """Parameters for a second order notch filter."""

    type: Literal["Notch"] = "Notch"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()


class PeakingEq(FilterParameters):
    """Parameters for a peaking EQ filter."""

    type: Literal["PeakingEq"] = "PeakingEq"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()
    gain_db: Float32 = DEFAULT_GAIN_DB()


class LowShelf(FilterParameters):
    """Parameters for a second order low shelf with a Butterworth Q."""

    type: Literal["LowShelf"] = "LowShelf"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    gain_db: Float32 = DEFAULT_GAIN_DB()


class HighShelf(FilterParameters):
    """Parameters for a second order high shelf with a Butterworth Q."""

    type: Literal["HighShelf"] = "HighShelf"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    gain_db: Float32 = DEFAULT_GAIN_DB()


class AllPass(FilterParameters):
    """Parameters for a second order all pass filter."""

    type: Literal["AllPass"] = "AllPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    q: Float32 = DEFAULT_Q()


class FirstOrderLowPass(FilterParameters):
    """Parameters for a first order low pass filter."""

    type: Literal["FirstOrderLowPass"] = "FirstOrderLowPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()


class FirstOrderHighPass(FilterParameters):
    """Parameters for a first order high pass filter."""

    type: Literal["FirstOrderHighPass"] = "FirstOrderHighPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()


class FirstOrderLowShelf(FilterParameters):
    """Parameters for a first order low shelf filter."""

    type: Literal["FirstOrderLowShelf"] = "FirstOrderLowShelf"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    gain_db: Float32 = DEFAULT_GAIN_DB()


class FirstOrderHighShelf(FilterParameters):
    """Parameters for a first order high shelf filter."""

    type: Literal["FirstOrderHighShelf"] = "FirstOrderHighShelf"
    freq: Float32 = DEFAULT_FILTER_FREQ()
    gain_db: Float32 = DEFAULT_GAIN_DB()


class FirstOrderAllPass(FilterParameters):
    """Parameters for a first order all pass filter."""

    type: Literal["FirstOrderAllPass"] = "FirstOrderAllPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()


class OnePoleLowPass(FilterParameters):
    """Parameters for a one pole exponential smoothing filter."""

    type: Literal["OnePoleLowPass"] = "OnePoleLowPass"
    freq: Float32 = DEFAULT_FILTER_FREQ()


FILTER_TYPES = Annotated[
    Union[
        Bypass,
        LowPass,
        HighPass,
        BandPass,
        Notch,
        PeakingEq,
        LowShelf,
        HighShelf,
        AllPass,
        FirstOrderLowPass,
        FirstOrderHighPass,
        FirstOrderLowShelf,
        FirstOrderHighShelf,
        FirstOrderAllPass,
        OnePoleLowPass,
    ],
    Field(discriminator="type"),
]

_filter_type_adapter = TypeAdapter(FILTER_TYPES)


def parse_filter_type(data: dict | str | bytes) -> FilterParameters:
    """
    Decode a filter type from a dict or a JSON string.

    The variant is selected by the ``type`` field.

    Parameters
    ----------
    data : dict | str | bytes
        The encoded filter type, e.g. ``{"type": "LowPass", "freq": 1000, "q": 0.707}``.

    Returns
    -------
    FilterParameters
        The decoded filter type.

    Raises
    ------
    pydantic.ValidationError
        If the type is unknown or the fields do not match the type.
    """
    if isinstance(data, (str, bytes)):
        return _filter_type_adapter.validate_json(data)
    return _filter_type_adapter.validate_python(data)
