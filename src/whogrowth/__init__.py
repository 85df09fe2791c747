"""
WHO growth percentile engine for children aged 0-36 months.

Converts weight, height and head circumference measurements into percentile
ranks against WHO reference norms, and generates 5th/50th/95th percentile
reference curves for growth charts.
"""

from .curves import curves_frame, generate_curves
from .errors import (
    GrowthError,
    InvalidAgeError,
    InvalidPercentileError,
    InvalidSexError,
    NegativeAgeError,
    UnknownMetricError,
)
from .models import GrowthEntry, GrowthMetric, MeasurementSample, PercentileCurve, Sex
from .percentiles import (
    display_percentile,
    ordinal_percentile,
    percentile_rank_for_measurement,
    percentile_rank_for_sample,
    percentile_value,
    z_score_for_measurement,
)
from .references import (
    median_value,
    reference_frame,
    reference_table,
    standard_deviation,
    validate_reference_integrity,
)
from .series import (
    build_measurement_series,
    current_percentile,
    entries_frame,
    format_age,
    is_healthy_gain,
    monthly_weight_gain,
    months_since_birth,
)
from .units import (
    CM_TO_IN,
    KG_TO_LB,
    feet_inches_to_cm,
    format_measurement,
    pounds_ounces_to_kg,
    to_display,
    to_metric,
    unit_label,
)
from .zscores import (
    percentile_for_z_score,
    z_score_for_percentile,
    z_scores_for_percentiles,
)

__all__ = [
    "CM_TO_IN",
    "KG_TO_LB",
    "GrowthEntry",
    "GrowthError",
    "GrowthMetric",
    "InvalidAgeError",
    "InvalidPercentileError",
    "InvalidSexError",
    "MeasurementSample",
    "NegativeAgeError",
    "PercentileCurve",
    "Sex",
    "UnknownMetricError",
    "build_measurement_series",
    "current_percentile",
    "curves_frame",
    "display_percentile",
    "entries_frame",
    "feet_inches_to_cm",
    "format_age",
    "format_measurement",
    "generate_curves",
    "is_healthy_gain",
    "median_value",
    "monthly_weight_gain",
    "months_since_birth",
    "ordinal_percentile",
    "percentile_for_z_score",
    "percentile_rank_for_measurement",
    "percentile_rank_for_sample",
    "percentile_value",
    "pounds_ounces_to_kg",
    "reference_frame",
    "reference_table",
    "standard_deviation",
    "to_display",
    "to_metric",
    "unit_label",
    "validate_reference_integrity",
    "z_score_for_measurement",
    "z_score_for_percentile",
    "z_scores_for_percentiles",
]
