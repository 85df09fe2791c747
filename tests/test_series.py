import datetime
import logging

import pandas as pd
import pytest

from whogrowth.config import SeriesConfig
from whogrowth.errors import NegativeAgeError
from whogrowth.models import GrowthEntry, GrowthMetric, Sex
from whogrowth.percentiles import percentile_rank_for_measurement
from whogrowth.series import (
    build_measurement_series,
    current_percentile,
    entries_frame,
    format_age,
    is_healthy_gain,
    monthly_weight_gain,
    months_since_birth,
)


@pytest.mark.parametrize(
    "born, measured, expected",
    [
        (datetime.date(2024, 1, 15), datetime.date(2024, 1, 15), 0),
        (datetime.date(2024, 1, 15), datetime.date(2024, 2, 14), 0),
        (datetime.date(2024, 1, 15), datetime.date(2024, 2, 15), 1),
        (datetime.date(2024, 1, 31), datetime.date(2024, 2, 29), 0),
        (datetime.date(2024, 1, 31), datetime.date(2024, 3, 31), 2),
        (datetime.date(2023, 3, 10), datetime.date(2024, 3, 10), 12),
        (datetime.date(2023, 11, 20), datetime.date(2024, 2, 1), 2),
    ],
)
def test_tc001_months_since_birth(born, measured, expected) -> None:
    assert months_since_birth(born, measured) == expected


def test_tc002_months_since_birth_accepts_strings_and_timestamps() -> None:
    assert months_since_birth("2024-01-01", pd.Timestamp("2024-07-01 08:30")) == 6


def test_tc003_measurement_before_birth_raises() -> None:
    with pytest.raises(NegativeAgeError):
        months_since_birth(datetime.date(2024, 1, 1), datetime.date(2023, 12, 31))


@pytest.mark.parametrize(
    "months, label",
    [
        (0, "0 months old"),
        (8, "8 months old"),
        (12, "1 year old"),
        (24, "2 years old"),
        (15, "1y 3m old"),
    ],
)
def test_tc004_format_age(months, label) -> None:
    assert format_age(months) == label


class TestBuildMeasurementSeries:
    """Tests for chart series built from growth entries"""

    def test_tc005_weight_series(self, sample_entries, birth_date):
        series = build_measurement_series(
            sample_entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE
        )
        assert list(series.columns) == ["date", "month", "value", "percentile"]
        assert series["month"].tolist() == [0, 6, 12]
        assert series["value"].tolist() == pytest.approx([3.3, 7.9, 9.6])
        assert series["percentile"].tolist() == pytest.approx([50.0, 50.0, 50.0])

    def test_tc006_placeholder_zero_dropped(self, sample_entries, birth_date):
        series = build_measurement_series(
            sample_entries, birth_date, GrowthMetric.HEIGHT, Sex.MALE
        )
        assert series["month"].tolist() == [0, 12]
        assert series["date"].tolist() == [
            datetime.date(2024, 1, 1),
            datetime.date(2025, 1, 1),
        ]

    def test_tc007_imperial_values_percentiles_unchanged(
        self, sample_entries, birth_date
    ):
        metric_series = build_measurement_series(
            sample_entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE
        )
        imperial = build_measurement_series(
            sample_entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE, use_metric=False
        )
        assert imperial["value"].tolist() == pytest.approx(
            [v * 2.20462 for v in metric_series["value"]]
        )
        pd.testing.assert_series_equal(
            imperial["percentile"], metric_series["percentile"]
        )

    def test_tc008_unsorted_entries_are_ordered(self, sample_entries, birth_date):
        series = build_measurement_series(
            list(reversed(sample_entries)), birth_date, "head_circumference", "M"
        )
        assert series["month"].tolist() == [0, 6, 12]

    def test_tc009_no_valid_values_returns_empty(self, birth_date):
        entries = [GrowthEntry(date=datetime.date(2024, 2, 1), weight_kg=4.0)]
        series = build_measurement_series(
            entries, birth_date, GrowthMetric.HEIGHT, Sex.FEMALE
        )
        assert series.empty
        assert list(series.columns) == ["date", "month", "value", "percentile"]

    def test_tc010_dataframe_input_with_custom_columns(self, birth_date):
        df = pd.DataFrame(
            {
                "measured_on": ["2024-07-01", "2024-01-01"],
                "wt": [7.3, 3.2],
                "ht": [65.7, 49.1],
                "hc": [0.0, 33.9],
            }
        )
        config = SeriesConfig(
            date_col="measured_on", weight_col="wt", height_col="ht", head_circ_col="hc"
        )
        series = build_measurement_series(
            df, birth_date, GrowthMetric.WEIGHT, Sex.FEMALE, config=config
        )
        assert series["month"].tolist() == [0, 6]
        assert series["percentile"].tolist() == pytest.approx([50.0, 50.0])

        head = build_measurement_series(
            df, birth_date, GrowthMetric.HEAD_CIRCUMFERENCE, Sex.FEMALE, config=config
        )
        assert len(head) == 1

    def test_tc011_missing_metric_column_raises(self, birth_date):
        df = pd.DataFrame({"date": ["2024-02-01"], "weight_kg": [4.5]})
        with pytest.raises(ValueError, match="height_cm"):
            build_measurement_series(df, birth_date, GrowthMetric.HEIGHT, Sex.MALE)

    def test_tc012_entry_before_birth_raises(self, sample_entries):
        with pytest.raises(NegativeAgeError):
            build_measurement_series(
                sample_entries,
                datetime.date(2024, 6, 1),
                GrowthMetric.WEIGHT,
                Sex.MALE,
            )

    def test_tc013_warns_for_extrapolated_ages(self, birth_date, caplog):
        entries = [GrowthEntry(date=datetime.date(2027, 6, 1), weight_kg=16.0)]
        with caplog.at_level(logging.WARNING):
            series = build_measurement_series(
                entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE
            )
        assert series["month"].tolist() == [41]
        assert "extrapolated" in caplog.text

    def test_tc014_warns_for_weights_in_pounds(self, birth_date, caplog):
        entries = [
            GrowthEntry(date=datetime.date(2024, 12, 1), weight_kg=40.0),
            GrowthEntry(date=datetime.date(2025, 1, 1), weight_kg=42.0),
        ]
        with caplog.at_level(logging.WARNING):
            build_measurement_series(entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE)
        assert "lb instead of kg" in caplog.text


def test_tc015_entries_frame_from_dicts() -> None:
    df = entries_frame(
        [
            {"date": "2024-03-01", "weight_kg": 5.0},
            {"date": "2024-02-01", "weight_kg": 4.2, "height_cm": 55.0},
        ]
    )
    assert list(df.columns) == ["date", "weight_kg", "height_cm", "head_circ_cm"]
    assert df["date"].tolist() == [datetime.date(2024, 2, 1), datetime.date(2024, 3, 1)]


def test_tc016_entries_frame_requires_date_column() -> None:
    with pytest.raises(ValueError, match="date"):
        entries_frame(pd.DataFrame({"weight_kg": [4.0]}))


def test_tc017_current_percentile(sample_entries, birth_date) -> None:
    rank = current_percentile(sample_entries, birth_date, GrowthMetric.WEIGHT, Sex.MALE)
    assert rank == pytest.approx(50.0)


def test_tc018_current_percentile_none_without_values(birth_date) -> None:
    entries = [GrowthEntry(date=datetime.date(2024, 2, 1), weight_kg=4.0)]
    assert current_percentile(entries, birth_date, "height", "F") is None


def test_tc019_monthly_weight_gain(sample_entries) -> None:
    """(9.6 - 3.3) kg over 12 months"""
    gain = monthly_weight_gain(sample_entries)
    assert gain == pytest.approx(0.525)
    assert is_healthy_gain(gain)


def test_tc020_monthly_weight_gain_needs_window(sample_entries) -> None:
    assert monthly_weight_gain(sample_entries[:2]) is None
    assert monthly_weight_gain(sample_entries[:2], window=2) == pytest.approx(
        (7.9 - 3.3) / 6
    )


def test_tc021_monthly_weight_gain_short_span_uses_one_month() -> None:
    entries = [
        GrowthEntry(date=datetime.date(2024, 3, 1), weight_kg=5.0),
        GrowthEntry(date=datetime.date(2024, 3, 10), weight_kg=5.2),
        GrowthEntry(date=datetime.date(2024, 3, 20), weight_kg=5.6),
    ]
    assert monthly_weight_gain(entries) == pytest.approx(0.6)


@pytest.mark.parametrize(
    "gain, healthy",
    [(0.5, True), (0.75, True), (1.0, True), (0.3, False), (1.4, False), (None, False)],
)
def test_tc022_is_healthy_gain(gain, healthy) -> None:
    assert is_healthy_gain(gain) is healthy


class TestNonIsoDateStrings:
    """Entries with month/day/year strings are ordered chronologically"""

    @pytest.fixture
    def us_dated_df(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "date": ["3/1/2024", "12/1/2024", "6/1/2024"],
                "weight_kg": [5.0, 9.0, 7.0],
            }
        )

    def test_tc023_entries_frame_sorts_by_parsed_date(self, us_dated_df):
        df = entries_frame(us_dated_df)
        assert df["weight_kg"].tolist() == [5.0, 7.0, 9.0]

    def test_tc024_series_months_in_date_order(self, us_dated_df, birth_date):
        series = build_measurement_series(
            us_dated_df, birth_date, GrowthMetric.WEIGHT, Sex.MALE
        )
        assert series["month"].tolist() == [2, 5, 11]

    def test_tc025_current_percentile_uses_latest_date(self, us_dated_df, birth_date):
        rank = current_percentile(us_dated_df, birth_date, GrowthMetric.WEIGHT, Sex.MALE)
        expected = percentile_rank_for_measurement(
            GrowthMetric.WEIGHT, 11, 9.0, Sex.MALE
        )
        assert rank == pytest.approx(expected)

    def test_tc026_monthly_weight_gain_chronological(self, us_dated_df):
        """(9.0 - 5.0) kg from March to December"""
        assert monthly_weight_gain(us_dated_df) == pytest.approx(4.0 / 9)
