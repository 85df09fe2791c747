import datetime

import numpy as np
import pytest

from whogrowth.models import GrowthEntry
from whogrowth.zscores import (
    percentile_for_z_score,
    z_score_for_percentile,
    z_scores_for_percentiles,
)


@pytest.fixture(scope="session", autouse=True)
def warm_up_jit() -> None:
    """Compile the numba kernels before timed property tests run."""
    z_score_for_percentile(50.0)
    z_scores_for_percentiles(np.array([50.0]))
    percentile_for_z_score(0.0)


@pytest.fixture
def birth_date() -> datetime.date:
    """Birth date shared by the sample entries."""
    return datetime.date(2024, 1, 1)


@pytest.fixture
def sample_entries() -> list[GrowthEntry]:
    """Growth entries at 0, 6 and 12 months sitting on the male medians."""
    return [
        GrowthEntry(
            date=datetime.date(2024, 1, 1),
            weight_kg=3.3,
            height_cm=49.9,
            head_circ_cm=34.5,
        ),
        # Height not measured at this visit
        GrowthEntry(
            date=datetime.date(2024, 7, 1),
            weight_kg=7.9,
            height_cm=0.0,
            head_circ_cm=43.3,
        ),
        GrowthEntry(
            date=datetime.date(2025, 1, 1),
            weight_kg=9.6,
            height_cm=75.7,
            head_circ_cm=46.1,
        ),
    ]
