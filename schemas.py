"""
Pydantic models for data validation in the Mock Video Generator.

Request fields are coerced rather than rejected: the prompt is cut to the
maximum length, the duration is clamped and an unknown aspect ratio falls
back to the default. Only a too-short prompt is refused, by the router.
"""

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import (
    ASPECT_RATIOS,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_DURATION,
    MAX_DURATION,
    MAX_PROMPT_LENGTH,
    MIN_DURATION,
)

AspectRatio = Literal["16:9", "9:16", "1:1", "4:3"]

MIN_SEED = -(2 ** 63)
MAX_SEED = 2 ** 63 - 1


def clamp_duration(value) -> float:
    # a blank string counts as zero, like a missing number typed into the form
    if isinstance(value, str) and not value.strip():
        value = 0
    try:
        duration = float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_DURATION)
    if math.isnan(duration):
        return float(DEFAULT_DURATION)
    return float(min(MAX_DURATION, max(MIN_DURATION, duration)))


class GenerationRequest(BaseModel):
    """Request model for submitting a mock video generation job."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    duration: float = float(DEFAULT_DURATION)
    aspect_ratio: AspectRatio = Field(DEFAULT_ASPECT_RATIO, alias="aspectRatio")
    seed: Optional[int] = None

    @field_validator("prompt", mode="before")
    @classmethod
    def _cut_prompt(cls, value):
        if value is None:
            return ""
        return str(value)[:MAX_PROMPT_LENGTH]

    @field_validator("duration", mode="before")
    @classmethod
    def _clamp_duration(cls, value):
        return clamp_duration(value)

    @field_validator("aspect_ratio", mode="before")
    @classmethod
    def _known_aspect_ratio(cls, value):
        return value if value in ASPECT_RATIOS else DEFAULT_ASPECT_RATIO

    @field_validator("seed", mode="before")
    @classmethod
    def _optional_seed(cls, value):
        if value is None or value == "" or isinstance(value, bool):
            return None
        try:
            seed = int(value)
        except (TypeError, ValueError, OverflowError):
            return None
        # the store keeps seeds in a signed 64-bit column
        if not MIN_SEED <= seed <= MAX_SEED:
            return None
        return seed


class JobResponse(BaseModel):
    """Response when submitting a background generation job."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: str  # always "queued" on submission


class StatusResponse(BaseModel):
    """Snapshot of a job; url and error are omitted when unset."""

    status: str  # "queued" | "processing" | "completed" | "failed"
    url: Optional[str] = None
    error: Optional[str] = None
