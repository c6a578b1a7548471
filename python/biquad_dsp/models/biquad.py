# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Model for configuring a single biquad filter."""

from typing import Literal

from pydantic import BaseModel, Field

from biquad_dsp.models.fields import FILTER_TYPES, Bypass


class BiquadParameters(BaseModel, extra="forbid"):
    """Parameters for a biquad filter.

    Attributes
    ----------
    filter_type : biquad_dsp.models.fields.FILTER_TYPES
        The type of filter to implement and its parameters.
    structure : str
        The realization structure, ``"df1"`` for direct form 1 or
        ``"df2t"`` for transposed direct form 2.
    fs : float
        The sample rate in Hz.
    """

    filter_type: FILTER_TYPES = Field(
        default=Bypass(),
        description="Type of filter to implement and its parameters.",
    )
    structure: Literal["df1", "df2t"] = Field(
        default="df2t", description="The filter realization structure."
    )
    fs: float = Field(default=48000, gt=0, description="Sample rate in Hz.")
