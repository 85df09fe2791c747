"""Exceptions raised by the growth percentile engine."""


class GrowthError(ValueError):
    """Base class for invalid input to the growth percentile engine."""


class InvalidPercentileError(GrowthError):
    """Raised when a percentile rank is NaN or outside the open interval (0, 100)."""


class NegativeAgeError(GrowthError):
    """Raised when an age in months is negative, or a measurement predates birth."""


class InvalidAgeError(GrowthError):
    """Raised when an age in months is NaN or not a whole number."""


class InvalidSexError(GrowthError):
    """Raised when a sex code cannot be mapped to male or female."""


class UnknownMetricError(GrowthError):
    """Raised when a value is not a supported growth metric."""
