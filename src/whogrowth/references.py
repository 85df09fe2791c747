"""
WHO Child Growth Standard reference tables (birth to 36 months).

Median values are tabulated monthly for months 0-36 and standard deviations
for months 0-23, per metric and sex. Ages beyond the tabulated range are
extended: medians linearly at a metric- and sex-specific monthly gain,
standard deviations as a per-metric constant.

All values are metric (kg for weight, cm for height and head circumference).
This module never converts units.
"""

from dataclasses import dataclass
from typing import Dict, Tuple
import logging

import numpy as np
import pandas as pd

from .config import MAX_TABULATED_MONTH, SD_TABLE_LENGTH
from .errors import InvalidAgeError, NegativeAgeError, UnknownMetricError
from .models import GrowthMetric, Sex


@dataclass(frozen=True)
class ReferenceTable:
    """
    Immutable reference data for one (metric, sex) pair.

    Attributes:
        medians: 50th percentile values indexed by month (0-36).
        standard_deviations: Standard deviations indexed by month (0-23).
        monthly_gain: Median increase per month beyond the table.
        sd_tail: Standard deviation used beyond the SD table.
    """

    medians: Tuple[float, ...]
    standard_deviations: Tuple[float, ...]
    monthly_gain: float
    sd_tail: float


# Standard deviation past month 23, per metric
SD_TAIL: Dict[GrowthMetric, float] = {
    GrowthMetric.WEIGHT: 1.8,
    GrowthMetric.HEIGHT: 3.5,
    GrowthMetric.HEAD_CIRCUMFERENCE: 1.5,
}

# Median gain per month past month 36
MONTHLY_GAIN: Dict[Tuple[GrowthMetric, Sex], float] = {
    (GrowthMetric.WEIGHT, Sex.MALE): 0.15,
    (GrowthMetric.WEIGHT, Sex.FEMALE): 0.14,
    (GrowthMetric.HEIGHT, Sex.MALE): 0.5,
    (GrowthMetric.HEIGHT, Sex.FEMALE): 0.45,
    (GrowthMetric.HEAD_CIRCUMFERENCE, Sex.MALE): 0.08,
    (GrowthMetric.HEAD_CIRCUMFERENCE, Sex.FEMALE): 0.07,
}

# Weight-for-age medians (kg)
_WEIGHT_MALE = (
    3.3, 4.5, 5.6, 6.4, 7.0, 7.5, 7.9, 8.3, 8.6, 8.9, 9.2, 9.4,  # 0-11
    9.6, 9.9, 10.1, 10.3, 10.5, 10.7, 10.9, 11.1, 11.3, 11.5, 11.8, 12.0,  # 12-23
    12.2, 12.4, 12.6, 12.8, 13.0, 13.3, 13.5, 13.7, 14.0, 14.2, 14.5, 14.8,  # 24-35
    15.1,  # 36
)
_WEIGHT_FEMALE = (
    3.2, 4.2, 5.1, 5.8, 6.4, 6.9, 7.3, 7.6, 7.9, 8.2, 8.5, 8.7,
    8.9, 9.2, 9.4, 9.6, 9.8, 10.0, 10.2, 10.4, 10.6, 10.9, 11.1, 11.3,
    11.5, 11.7, 11.9, 12.1, 12.3, 12.5, 12.7, 12.9, 13.1, 13.3, 13.5, 13.7,
    13.9,
)

# Length/height-for-age medians (cm)
_HEIGHT_MALE = (
    49.9, 54.7, 58.4, 61.4, 63.9, 65.9, 67.6, 69.2, 70.6, 72.0, 73.3, 74.5,
    75.7, 76.9, 78.0, 79.1, 80.2, 81.2, 82.3, 83.2, 84.2, 85.1, 86.0, 86.9,
    87.8, 88.7, 89.5, 90.3, 91.1, 91.9, 92.7, 93.4, 94.2, 94.9, 95.6, 96.3,
    97.0,
)
_HEIGHT_FEMALE = (
    49.1, 53.7, 57.1, 59.8, 62.1, 64.0, 65.7, 67.3, 68.7, 70.1, 71.5, 72.6,
    73.8, 75.0, 76.2, 77.3, 78.4, 79.5, 80.5, 81.5, 82.5, 83.5, 84.4, 85.3,
    86.2, 87.0, 87.8, 88.6, 89.4, 90.2, 90.9, 91.6, 92.3, 93.0, 93.7, 94.4,
    95.1,
)

# Head circumference-for-age medians (cm)
_HEAD_MALE = (
    34.5, 37.3, 39.1, 40.5, 41.6, 42.6, 43.3, 44.0, 44.5, 45.0, 45.4, 45.8,
    46.1, 46.3, 46.6, 46.8, 47.0, 47.2, 47.4, 47.5, 47.7, 47.8, 48.0, 48.1,
    48.3, 48.4, 48.5, 48.6, 48.7, 48.8, 48.9, 49.0, 49.1, 49.2, 49.3, 49.4,
    49.5,
)
_HEAD_FEMALE = (
    33.9, 36.5, 38.3, 39.5, 40.6, 41.5, 42.2, 42.8, 43.4, 43.8, 44.2, 44.6,
    44.9, 45.2, 45.4, 45.7, 45.9, 46.1, 46.2, 46.4, 46.6, 46.7, 46.9, 47.0,
    47.2, 47.3, 47.5, 47.6, 47.7, 47.8, 47.9, 48.0, 48.1, 48.2, 48.3, 48.4,
    48.5,
)

# Standard deviations, months 0-23
_WEIGHT_SD_MALE = (
    0.5, 0.6, 0.7, 0.7, 0.8, 0.8, 0.8, 0.9, 0.9, 0.9, 1.0, 1.0,
    1.0, 1.0, 1.1, 1.1, 1.1, 1.1, 1.2, 1.2, 1.2, 1.2, 1.3, 1.3,
)
_WEIGHT_SD_FEMALE = (
    0.5, 0.6, 0.6, 0.7, 0.7, 0.8, 0.8, 0.8, 0.9, 0.9, 0.9, 1.0,
    1.0, 1.0, 1.0, 1.1, 1.1, 1.1, 1.1, 1.2, 1.2, 1.2, 1.2, 1.3,
)
_HEIGHT_SD_MALE = (
    1.9, 2.0, 2.1, 2.1, 2.2, 2.2, 2.2, 2.3, 2.3, 2.4, 2.4, 2.5,
    2.6, 2.6, 2.7, 2.7, 2.8, 2.8, 2.9, 2.9, 3.0, 3.0, 3.1, 3.1,
)
_HEIGHT_SD_FEMALE = (
    1.9, 2.0, 2.0, 2.1, 2.1, 2.2, 2.2, 2.3, 2.3, 2.4, 2.4, 2.5,
    2.5, 2.6, 2.6, 2.7, 2.7, 2.8, 2.8, 2.9, 2.9, 3.0, 3.0, 3.1,
)
_HEAD_SD_MALE = (
    1.3, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.3, 1.3,
    1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.4, 1.4,
)
_HEAD_SD_FEMALE = (
    1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.2, 1.3,
    1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.3, 1.4,
)


def _build_tables() -> Dict[Tuple[GrowthMetric, Sex], ReferenceTable]:
    """Assemble the immutable (metric, sex) -> ReferenceTable mapping."""
    raw = {
        (GrowthMetric.WEIGHT, Sex.MALE): (_WEIGHT_MALE, _WEIGHT_SD_MALE),
        (GrowthMetric.WEIGHT, Sex.FEMALE): (_WEIGHT_FEMALE, _WEIGHT_SD_FEMALE),
        (GrowthMetric.HEIGHT, Sex.MALE): (_HEIGHT_MALE, _HEIGHT_SD_MALE),
        (GrowthMetric.HEIGHT, Sex.FEMALE): (_HEIGHT_FEMALE, _HEIGHT_SD_FEMALE),
        (GrowthMetric.HEAD_CIRCUMFERENCE, Sex.MALE): (_HEAD_MALE, _HEAD_SD_MALE),
        (GrowthMetric.HEAD_CIRCUMFERENCE, Sex.FEMALE): (
            _HEAD_FEMALE,
            _HEAD_SD_FEMALE,
        ),
    }
    return {
        key: ReferenceTable(
            medians=medians,
            standard_deviations=sds,
            monthly_gain=MONTHLY_GAIN[key],
            sd_tail=SD_TAIL[key[0]],
        )
        for key, (medians, sds) in raw.items()
    }


_TABLES = _build_tables()


def resolve_metric(metric) -> GrowthMetric:
    """
    Map a GrowthMetric or its string value to a GrowthMetric.

    Raises:
        UnknownMetricError: If the value names no supported metric.
    """
    if isinstance(metric, GrowthMetric):
        return metric
    try:
        return GrowthMetric(metric)
    except ValueError:
        supported = [m.value for m in GrowthMetric]
        raise UnknownMetricError(
            f"Unsupported growth metric {metric!r}. Supported metrics: {supported}"
        ) from None


def _validate_month(month: int) -> int:
    if isinstance(month, bool) or not float(month).is_integer():
        raise InvalidAgeError(f"Age in months must be a whole number, got {month}")
    if month < 0:
        raise NegativeAgeError(f"Age in months must be non-negative, got {month}")
    return int(month)


def reference_table(metric, sex) -> ReferenceTable:
    """Return the reference table for a metric and sex."""
    return _TABLES[(resolve_metric(metric), Sex.parse(sex))]


def median_value(metric, sex, month: int) -> float:
    """
    Median (50th percentile) value for a metric at a given age.

    Within months 0-36 the tabulated value is returned exactly. Beyond the
    table the last value is extended linearly:
    ``last + (month - len(medians) + 1) * monthly_gain``.

    Args:
        metric: GrowthMetric (or its string value)
        sex: Sex (or 'M'/'F')
        month: Age in whole months, >= 0

    Returns:
        Median in kg (weight) or cm (height, head circumference)

    Raises:
        InvalidAgeError: If month is NaN or not a whole number
        NegativeAgeError: If month < 0
    """
    month = _validate_month(month)
    table = reference_table(metric, sex)
    medians = table.medians
    if month < len(medians):
        return medians[month]
    return medians[-1] + (month - len(medians) + 1) * table.monthly_gain


def standard_deviation(metric, sex, month: int) -> float:
    """
    Standard deviation for a metric at a given age.

    Tabulated for months 0-23; later months return the metric's constant
    tail value (weight 1.8, height 3.5, head circumference 1.5).

    Raises:
        InvalidAgeError: If month is NaN or not a whole number
        NegativeAgeError: If month < 0
    """
    month = _validate_month(month)
    table = reference_table(metric, sex)
    if month < len(table.standard_deviations):
        return table.standard_deviations[month]
    return table.sd_tail


def reference_frame(metric, sex, months: int = MAX_TABULATED_MONTH + 1) -> pd.DataFrame:
    """
    Tabulate median and standard deviation for months 0..months-1.

    Returns:
        DataFrame with columns 'month', 'median', 'sd'
    """
    month_range = np.arange(months, dtype=int)
    return pd.DataFrame(
        {
            "month": month_range,
            "median": [median_value(metric, sex, m) for m in month_range],
            "sd": [standard_deviation(metric, sex, m) for m in month_range],
        }
    )


def validate_reference_integrity() -> bool:
    """
    Validate the compiled-in reference tables.

    Checks table lengths, positivity of every value and that medians never
    decrease with age. Logs a warning for each problem found but doesn't
    raise.

    Returns:
        True if all tables pass, False otherwise
    """
    valid = True
    for (metric, sex), table in _TABLES.items():
        key = f"{metric.value}_{sex.name.lower()}"
        medians = np.asarray(table.medians, dtype=np.float64)
        sds = np.asarray(table.standard_deviations, dtype=np.float64)

        if len(medians) != MAX_TABULATED_MONTH + 1:
            logging.warning(
                f"{key}: expected {MAX_TABULATED_MONTH + 1} medians, found {len(medians)}"
            )
            valid = False
        if len(sds) != SD_TABLE_LENGTH:
            logging.warning(
                f"{key}: expected {SD_TABLE_LENGTH} standard deviations, found {len(sds)}"
            )
            valid = False
        if np.any(medians <= 0) or np.any(sds <= 0):
            logging.warning(f"{key}: non-positive reference values")
            valid = False
        if np.any(np.diff(medians) < 0):
            logging.warning(f"{key}: medians decrease with age")
            valid = False
        if table.monthly_gain <= 0 or table.sd_tail <= 0:
            logging.warning(f"{key}: non-positive extrapolation constants")
            valid = False
    return valid
