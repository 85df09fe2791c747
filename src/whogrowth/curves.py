"""
Reference percentile curves for growth charts.
"""

import functools
from typing import List

import pandas as pd

from .config import CURVE_MONTHS, CURVE_PERCENTILES
from .models import PercentileCurve, Sex
from .percentiles import percentile_value
from .references import resolve_metric


@functools.lru_cache(maxsize=None)
def _cached_curves(metric, sex, use_metric: bool) -> tuple:
    return tuple(
        PercentileCurve(
            percentile=percentile,
            values=tuple(
                percentile_value(metric, month, percentile, sex, use_metric)
                for month in range(CURVE_MONTHS)
            ),
        )
        for percentile in CURVE_PERCENTILES
    )


def generate_curves(metric, sex, use_metric: bool = True) -> List[PercentileCurve]:
    """
    Generate the 5th, 50th and 95th percentile curves for months 0-36.

    Curves are returned in rank order [5, 50, 95] so callers may index
    positionally; each holds 37 values in month order. Output is
    deterministic, so results are cached per (metric, sex, use_metric).

    Args:
        metric: GrowthMetric (or its string value)
        sex: Sex (or 'M'/'F')
        use_metric: kg/cm if True, lb/in otherwise

    Returns:
        List of three PercentileCurve
    """
    return list(_cached_curves(resolve_metric(metric), Sex.parse(sex), bool(use_metric)))


def curves_frame(metric, sex, use_metric: bool = True) -> pd.DataFrame:
    """
    Long-form table of the reference curves for plotting layers.

    Returns:
        DataFrame with columns 'month', 'percentile', 'value'; one row per
        (percentile, month), ordered by percentile then month
    """
    rows = [
        {"month": month, "percentile": curve.percentile, "value": value}
        for curve in generate_curves(metric, sex, use_metric)
        for month, value in enumerate(curve.values)
    ]
    return pd.DataFrame(rows, columns=["month", "percentile", "value"])
