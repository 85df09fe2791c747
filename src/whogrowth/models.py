"""
Core data types for growth percentile calculations.

Values carried by these types are always metric (kg for weight, cm for
height and head circumference). Imperial units only appear at the
boundaries handled by ``whogrowth.units``.
"""

from dataclasses import dataclass
import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, field_validator

from .errors import InvalidSexError


class GrowthMetric(Enum):
    """Anthropometric measure tracked against the WHO standards."""

    WEIGHT = "weight"
    HEIGHT = "height"
    HEAD_CIRCUMFERENCE = "head_circumference"


class Sex(Enum):
    """Reference population selector. There is no unknown state."""

    MALE = "M"
    FEMALE = "F"

    @classmethod
    def parse(cls, value) -> "Sex":
        """
        Map a sex code to a Sex member.

        Accepts Sex members and case-insensitive 'M'/'F'/'male'/'female'.

        Raises:
            InvalidSexError: If the code is empty or not recognised.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidSexError(f"Sex values must be 'M' or 'F', got {value!r}")
        code = value.strip().upper()
        if code in ("M", "MALE", "BOY"):
            return cls.MALE
        if code in ("F", "FEMALE", "GIRL"):
            return cls.FEMALE
        raise InvalidSexError(f"Sex values must be 'M' or 'F', got {value!r}")


@dataclass(frozen=True)
class MeasurementSample:
    """A single measurement at a whole-month age, in metric units."""

    month: int
    value: float
    sex: Sex


@dataclass(frozen=True)
class PercentileCurve:
    """Reference values for one percentile rank, one per month from 0 to 36."""

    percentile: float
    values: Tuple[float, ...]


class GrowthEntry(BaseModel):
    """
    One growth record as held by the data store.

    A value of 0 (or None) means the metric was not measured on that date;
    such values are filtered out before percentile lookup.
    """

    date: datetime.date
    weight_kg: Optional[float] = 0.0
    height_cm: Optional[float] = 0.0
    head_circ_cm: Optional[float] = 0.0

    @field_validator("weight_kg", "height_cm", "head_circ_cm")
    @classmethod
    def non_negative(cls, v: Optional[float]) -> Optional[float]:
        """Reject negative measurements."""
        if v is not None and v < 0:
            raise ValueError("Measurements must be non-negative")
        return v
