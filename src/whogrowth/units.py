"""
Unit conversion between metric storage and display units.

All measurements are stored and computed in metric (kg, cm). Conversion to
imperial (lb, in) is applied once, on output, and inverted once on input.
"""

from .models import GrowthMetric
from .references import resolve_metric

KG_TO_LB = 2.20462
CM_TO_IN = 0.393701
OZ_PER_LB = 16.0
IN_PER_FT = 12.0

_FACTORS = {
    GrowthMetric.WEIGHT: KG_TO_LB,
    GrowthMetric.HEIGHT: CM_TO_IN,
    GrowthMetric.HEAD_CIRCUMFERENCE: CM_TO_IN,
}

_LABELS = {
    GrowthMetric.WEIGHT: ("kg", "lb"),
    GrowthMetric.HEIGHT: ("cm", "in"),
    GrowthMetric.HEAD_CIRCUMFERENCE: ("cm", "in"),
}


def conversion_factor(metric) -> float:
    """Metric -> imperial multiplier for a growth metric."""
    return _FACTORS[resolve_metric(metric)]


def to_display(value: float, metric, use_metric: bool) -> float:
    """Convert a metric value to the display unit system."""
    if use_metric:
        return value
    return value * conversion_factor(metric)


def to_metric(value: float, metric, use_metric: bool) -> float:
    """Convert a value entered in the display unit system back to metric."""
    if use_metric:
        return value
    return value / conversion_factor(metric)


def unit_label(metric, use_metric: bool) -> str:
    """Unit abbreviation for a metric: 'kg'/'lb' or 'cm'/'in'."""
    metric_label, imperial_label = _LABELS[resolve_metric(metric)]
    return metric_label if use_metric else imperial_label


def format_measurement(
    value_metric: float, metric, use_metric: bool, decimals: int = 1
) -> str:
    """
    Format a metric measurement for display, e.g. '7.9 kg' or '17.4 lb'.

    Args:
        value_metric: Value in kg or cm
        metric: GrowthMetric of the value
        use_metric: Display in metric units if True, imperial otherwise
        decimals: Digits after the decimal point

    Returns:
        Formatted string with unit label
    """
    value = to_display(value_metric, metric, use_metric)
    return f"{value:.{decimals}f} {unit_label(metric, use_metric)}"


def pounds_ounces_to_kg(pounds: float, ounces: float = 0.0) -> float:
    """Convert a weight entered as pounds and ounces to kg."""
    return (pounds + ounces / OZ_PER_LB) / KG_TO_LB


def feet_inches_to_cm(feet: float, inches: float = 0.0) -> float:
    """Convert a length entered as feet and inches to cm."""
    return (feet * IN_PER_FT + inches) / CM_TO_IN
