"""
Z-Score Conversion Utilities for Growth Percentiles

This module converts between percentile ranks (0-100) and standard-normal
z-scores. The percentile -> z direction uses the Beasley-Springer-Moro
rational approximation of the inverse normal CDF (absolute error about
1.15e-9); the z -> percentile direction uses the normal CDF from scipy.
"""

import math

import numpy as np
from numba import jit
from scipy import stats

from .errors import InvalidPercentileError

# Region boundaries of the rational approximation
P_LOW = 0.02425
P_HIGH = 1.0 - P_LOW

# Central region numerator/denominator coefficients
A = (
    -39.6968302866538,
    220.946098424521,
    -275.928510446969,
    138.357751867269,
    -30.6647980661472,
    2.50662827745924,
)
B = (
    -54.4760987982241,
    161.585836858041,
    -155.698979859887,
    66.8013118877197,
    -13.2806815528857,
)

# Tail numerator/denominator coefficients
C = (
    -0.00778489400243029,
    -0.322396458041136,
    -2.40075827716184,
    -2.54973253934373,
    4.37466414146497,
    2.93816398269878,
)
D = (
    0.00778469570904146,
    0.322467129070040,
    2.44513413714300,
    3.75440866190742,
)


@jit(nopython=True, cache=True)
def _tail(q: float) -> float:
    num = ((((C[0] * q + C[1]) * q + C[2]) * q + C[3]) * q + C[4]) * q + C[5]
    den = (((D[0] * q + D[1]) * q + D[2]) * q + D[3]) * q + 1.0
    return num / den


@jit(nopython=True, cache=True)
def inverse_normal_cdf(p: float) -> float:
    """
    Inverse standard normal CDF for a probability p in (0, 1).

    Three-region piecewise rational approximation:
    - p < 0.02425: lower tail with q = sqrt(-2 ln p)
    - 0.02425 <= p <= 0.97575: central region with q = p - 0.5, r = q^2
    - p > 0.97575: upper tail with q = sqrt(-2 ln(1 - p)), result negated

    Args:
        p: Probability, strictly between 0 and 1 (not checked here)

    Returns:
        z such that Phi(z) = p
    """
    if p < P_LOW:
        q = math.sqrt(-2.0 * math.log(p))
        return _tail(q)
    if p <= P_HIGH:
        q = p - 0.5
        r = q * q
        num = (
            (((((A[0] * r + A[1]) * r + A[2]) * r + A[3]) * r + A[4]) * r + A[5])
            * q
        )
        den = ((((B[0] * r + B[1]) * r + B[2]) * r + B[3]) * r + B[4]) * r + 1.0
        return num / den
    q = math.sqrt(-2.0 * math.log(1.0 - p))
    return -_tail(q)


@jit(nopython=True, cache=True)
def _inverse_normal_cdf_array(p: np.ndarray) -> np.ndarray:
    out = np.full(p.shape, np.nan, dtype=np.float64)
    for i in range(p.size):
        if p[i] > 0.0 and p[i] < 1.0:
            out[i] = inverse_normal_cdf(p[i])
    return out


def _validate_percentile(percentile: float) -> float:
    """Validate a percentile rank lies in the open interval (0, 100)."""
    value = float(percentile)
    if math.isnan(value) or not 0.0 < value < 100.0:
        raise InvalidPercentileError(
            f"Percentile must be strictly between 0 and 100, got {percentile}"
        )
    return value


def z_score_for_percentile(percentile: float) -> float:
    """
    Convert a percentile rank to a standard-normal z-score.

    Args:
        percentile: Rank in the open interval (0, 100), e.g. 5, 50, 95

    Returns:
        z-score (0 at the 50th percentile, about -1.645 at the 5th)

    Raises:
        InvalidPercentileError: If percentile is NaN or outside (0, 100)
    """
    p = _validate_percentile(percentile) / 100.0
    return float(inverse_normal_cdf(p))


def z_scores_for_percentiles(percentiles: np.ndarray) -> np.ndarray:
    """
    Vectorized percentile -> z-score conversion.

    Entries that are NaN or outside (0, 100) yield NaN instead of raising.

    Args:
        percentiles: Array of percentile ranks

    Returns:
        Array of z-scores with the input's shape
    """
    arr = np.asarray(percentiles, dtype=np.float64)
    if arr.size == 0:
        return np.full_like(arr, np.nan)
    flat = _inverse_normal_cdf_array(arr.ravel() / 100.0)
    return flat.reshape(arr.shape)


def percentile_for_z_score(z: float) -> float:
    """
    Convert a z-score to a percentile rank via the standard normal CDF.

    Args:
        z: Standard-normal z-score

    Returns:
        Percentile rank, 100 * Phi(z)
    """
    return float(100.0 * stats.norm.cdf(z))
