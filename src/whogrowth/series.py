"""
Chart-ready measurement series built from the data store's growth entries.

Entries carry a measurement date and metric values (kg, cm); a value of 0
means the metric was not recorded. Each valid value is placed at the
child's age in whole calendar months and paired with its percentile rank.
"""

from typing import Iterable, Optional, Union
import datetime
import logging

import numpy as np
import pandas as pd

from .config import (
    HEALTHY_GAIN_RANGE,
    MAX_PLAUSIBLE_LENGTH_CM,
    MAX_PLAUSIBLE_WEIGHT_KG,
    MAX_TABULATED_MONTH,
    SeriesConfig,
    TREND_WINDOW,
)
from .errors import NegativeAgeError
from .models import GrowthEntry, GrowthMetric
from .percentiles import percentile_rank_for_measurement
from .references import resolve_metric
from .units import to_display

SERIES_COLUMNS = ["date", "month", "value", "percentile"]

EntriesLike = Union[pd.DataFrame, Iterable[Union[GrowthEntry, dict]]]


def _as_date(value) -> datetime.date:
    return pd.Timestamp(value).date()


def months_since_birth(birth_date, entry_date) -> int:
    """
    Whole calendar months between birth and a measurement date.

    A month is counted once the day-of-month of the birth date is reached,
    so Jan 15 -> Feb 14 is 0 months and Jan 15 -> Feb 15 is 1 month.

    Raises:
        NegativeAgeError: If entry_date is before birth_date
    """
    born = _as_date(birth_date)
    measured = _as_date(entry_date)
    if measured < born:
        raise NegativeAgeError(
            f"Measurement date {measured} is before birth date {born}"
        )
    months = (measured.year - born.year) * 12 + (measured.month - born.month)
    if measured.day < born.day:
        months -= 1
    return months


def format_age(months: int) -> str:
    """Age label: '8 months old', '2 years old' or '1y 3m old'."""
    if months < 0:
        raise NegativeAgeError(f"Age in months must be non-negative, got {months}")
    if months < 12:
        return f"{months} months old"
    years, remaining = divmod(months, 12)
    if remaining == 0:
        return f"{years} year{'' if years == 1 else 's'} old"
    return f"{years}y {remaining}m old"


def _metric_column(metric: GrowthMetric, config: SeriesConfig) -> str:
    return {
        GrowthMetric.WEIGHT: config.weight_col,
        GrowthMetric.HEIGHT: config.height_col,
        GrowthMetric.HEAD_CIRCUMFERENCE: config.head_circ_col,
    }[metric]


def entries_frame(
    entries: EntriesLike, config: Optional[SeriesConfig] = None
) -> pd.DataFrame:
    """
    Normalize growth entries to a DataFrame sorted by date.

    Args:
        entries: DataFrame, or iterable of GrowthEntry / dicts with the
            GrowthEntry fields
        config: Column mapping for DataFrame input (defaults to SeriesConfig())

    Returns:
        DataFrame with one row per entry, sorted by the date column

    Raises:
        ValueError: If the date column is missing
    """
    config = config or SeriesConfig()
    if isinstance(entries, pd.DataFrame):
        df = entries.copy()
    else:
        records = [
            GrowthEntry.model_validate(entry).model_dump() for entry in entries
        ]
        df = pd.DataFrame(
            records, columns=["date", "weight_kg", "height_cm", "head_circ_cm"]
        ).rename(
            columns={
                "date": config.date_col,
                "weight_kg": config.weight_col,
                "height_cm": config.height_col,
                "head_circ_cm": config.head_circ_col,
            }
        )
    if config.date_col not in df.columns:
        raise ValueError(f"Column '{config.date_col}' does not exist in DataFrame")
    return df.sort_values(
        config.date_col, kind="stable", key=pd.to_datetime
    ).reset_index(drop=True)


def _log_unit_warnings(metric: GrowthMetric, values: pd.Series) -> None:
    """Log warnings for metric values that look like imperial or mm input."""
    if values.empty:
        return
    median = values.median()
    if metric is GrowthMetric.WEIGHT and median > MAX_PLAUSIBLE_WEIGHT_KG:
        logging.warning(
            f"Median weight {median:.1f} kg is implausible for 0-36 months - "
            "values may be in lb instead of kg"
        )
    elif metric is not GrowthMetric.WEIGHT and median > MAX_PLAUSIBLE_LENGTH_CM:
        logging.warning(
            f"Median {metric.value} {median:.1f} cm is implausible for 0-36 months - "
            "values may be in mm instead of cm"
        )


def build_measurement_series(
    entries: EntriesLike,
    birth_date,
    metric,
    sex,
    use_metric: bool = True,
    config: Optional[SeriesConfig] = None,
) -> pd.DataFrame:
    """
    Build the chart series for one metric.

    Entries with a missing or non-positive value for the metric are dropped
    so placeholder zeros are never plotted. Percentile ranks are computed
    from metric values; only the 'value' column is converted for display.

    Args:
        entries: Growth entries (see entries_frame)
        birth_date: Child's birth date
        metric: GrowthMetric (or its string value)
        sex: Sex (or 'M'/'F')
        use_metric: Display values in kg/cm if True, lb/in otherwise
        config: Column mapping for DataFrame input

    Returns:
        DataFrame with columns 'date', 'month', 'value', 'percentile'

    Raises:
        NegativeAgeError: If an entry predates the birth date
        ValueError: If the metric's column is missing
    """
    config = config or SeriesConfig()
    metric = resolve_metric(metric)
    df = entries_frame(entries, config)
    column = _metric_column(metric, config)
    if column not in df.columns:
        raise ValueError(f"Column '{column}' does not exist in DataFrame")

    values = pd.to_numeric(df[column], errors="coerce")
    valid = values > 0
    dropped = int((~valid).sum())
    if dropped:
        logging.debug(f"Dropped {dropped} entries without a {metric.value} value")

    if not valid.any():
        return pd.DataFrame(columns=SERIES_COLUMNS)

    dates = df.loc[valid, config.date_col]
    metric_values = values[valid].astype(np.float64)
    _log_unit_warnings(metric, metric_values)

    months = [months_since_birth(birth_date, d) for d in dates]
    if max(months) > MAX_TABULATED_MONTH:
        logging.warning(
            f"Ages above {MAX_TABULATED_MONTH} months detected - "
            "reference values are extrapolated for these entries"
        )

    percentiles = [
        percentile_rank_for_measurement(metric, month, value, sex)
        for month, value in zip(months, metric_values)
    ]
    return pd.DataFrame(
        {
            "date": [_as_date(d) for d in dates],
            "month": months,
            "value": [to_display(v, metric, use_metric) for v in metric_values],
            "percentile": percentiles,
        },
        columns=SERIES_COLUMNS,
    )


def current_percentile(
    entries: EntriesLike,
    birth_date,
    metric,
    sex,
    config: Optional[SeriesConfig] = None,
) -> Optional[float]:
    """
    Percentile rank of the most recent valid measurement for a metric.

    Returns:
        Rank in (0, 100), or None if no entry has a value for the metric
    """
    series = build_measurement_series(entries, birth_date, metric, sex, config=config)
    if series.empty:
        return None
    return float(series["percentile"].iloc[-1])


def monthly_weight_gain(
    entries: EntriesLike,
    window: int = TREND_WINDOW,
    config: Optional[SeriesConfig] = None,
) -> Optional[float]:
    """
    Average weight gain in kg per month over the most recent entries.

    Uses the first and last of the last ``window`` weighed entries; the
    elapsed time is counted in whole calendar months, at least 1.

    Returns:
        kg per month, or None if fewer than ``window`` weighed entries exist
    """
    config = config or SeriesConfig()
    df = entries_frame(entries, config)
    weights = pd.to_numeric(df[config.weight_col], errors="coerce")
    weighed = df[weights > 0]
    if len(weighed) < window:
        return None
    recent = weighed.tail(window)
    first, last = recent.iloc[0], recent.iloc[-1]
    gain = float(last[config.weight_col]) - float(first[config.weight_col])
    span = months_since_birth(first[config.date_col], last[config.date_col])
    return gain / max(span, 1)


def is_healthy_gain(gain_kg_per_month: Optional[float]) -> bool:
    """True if a monthly weight gain lies in the healthy range (0.5-1.0 kg)."""
    if gain_kg_per_month is None:
        return False
    low, high = HEALTHY_GAIN_RANGE
    return low <= gain_kg_per_month <= high
