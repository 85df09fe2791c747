"""
Configuration constants for growth percentile calculations.
"""

from pydantic import BaseModel, field_validator, model_validator

# Reference table coverage
MAX_TABULATED_MONTH = 36
SD_TABLE_LENGTH = 24

# Curve generation
CURVE_PERCENTILES = (5.0, 50.0, 95.0)
CURVE_MONTHS = MAX_TABULATED_MONTH + 1

# Growth trend (kg per month considered a healthy weight gain)
HEALTHY_GAIN_RANGE = (0.5, 1.0)
TREND_WINDOW = 3

# Unit sanity checks on metric input series
MAX_PLAUSIBLE_WEIGHT_KG = 30.0
MAX_PLAUSIBLE_LENGTH_CM = 150.0


class SeriesConfig(BaseModel):
    """
    Column mapping for growth entry tables handed over by the data store.

    Attributes:
        date_col (str): Column holding the measurement date.
        weight_col (str): Column holding weight in kg.
        height_col (str): Column holding height in cm.
        head_circ_col (str): Column holding head circumference in cm.
    """

    date_col: str = "date"
    weight_col: str = "weight_kg"
    height_col: str = "height_cm"
    head_circ_col: str = "head_circ_cm"

    @field_validator("date_col", "weight_col", "height_col", "head_circ_col")
    @classmethod
    def validate_column_names(cls, v: str) -> str:
        """Ensure column names are non-empty strings."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Column name must be a non-empty string")
        return v

    @model_validator(mode="after")
    def unique_columns(self) -> "SeriesConfig":
        columns = [self.date_col, self.weight_col, self.height_col, self.head_circ_col]
        if len(columns) != len(set(columns)):
            raise ValueError("Configuration must specify unique column names")
        return self
