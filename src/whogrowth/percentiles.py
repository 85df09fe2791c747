"""
Percentile calculations against the WHO reference tables.

Combines the reference table store with the z-score engine under a normal
approximation: ``value = median + z * sd``. Inverting that relation gives
the percentile rank of a measured value.
"""

from .models import MeasurementSample
from .references import median_value, resolve_metric, standard_deviation
from .units import to_display
from .zscores import percentile_for_z_score, z_score_for_percentile


def percentile_value(
    metric, month: int, percentile: float, sex, use_metric: bool = True
) -> float:
    """
    Reference value of a metric at a given age and percentile rank.

    Args:
        metric: GrowthMetric (or its string value)
        month: Age in whole months, >= 0
        percentile: Rank in (0, 100)
        sex: Sex (or 'M'/'F')
        use_metric: Return kg/cm if True, lb/in otherwise

    Returns:
        median + z * sd, converted to display units on the final step

    Raises:
        InvalidPercentileError: If percentile is outside (0, 100)
        NegativeAgeError: If month < 0
    """
    metric = resolve_metric(metric)
    median = median_value(metric, sex, month)
    sd = standard_deviation(metric, sex, month)
    z = z_score_for_percentile(percentile)
    return to_display(median + z * sd, metric, use_metric)


def z_score_for_measurement(metric, month: int, value: float, sex) -> float:
    """
    Number of standard deviations a metric value lies from the median.

    Args:
        value: Measured value in metric units (kg or cm)

    Returns:
        (value - median) / sd
    """
    median = median_value(metric, sex, month)
    sd = standard_deviation(metric, sex, month)
    return (value - median) / sd


def percentile_rank_for_measurement(
    metric, month: int, measured_value_metric: float, sex
) -> float:
    """
    Percentile rank of a measured value in the reference population.

    Args:
        metric: GrowthMetric (or its string value)
        month: Age in whole months, >= 0
        measured_value_metric: Measurement in kg or cm
        sex: Sex (or 'M'/'F')

    Returns:
        Rank in (0, 100); 50 at the median
    """
    z = z_score_for_measurement(metric, month, measured_value_metric, sex)
    return percentile_for_z_score(z)


def percentile_rank_for_sample(sample: MeasurementSample, metric) -> float:
    """Percentile rank of a MeasurementSample."""
    return percentile_rank_for_measurement(
        metric, sample.month, sample.value, sample.sex
    )


def display_percentile(rank: float) -> int:
    """Round a percentile rank to a whole number clamped to [0, 100]."""
    return int(min(max(round(rank), 0), 100))


def ordinal_percentile(rank: float) -> str:
    """Card label for a percentile rank, e.g. '75th percentile'."""
    n = display_percentile(rank)
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix} percentile"
