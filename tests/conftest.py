import numpy as np
import pytest


@pytest.fixture
def durbin_haps():
    """Eight haplotypes over six sites, rows are sites."""

    return np.array(
        [
            [0, 1, 1, 0, 0, 1, 1, 0],
            [1, 1, 1, 1, 0, 0, 1, 1],
            [0, 0, 1, 1, 0, 0, 0, 0],
            [1, 0, 1, 1, 0, 0, 0, 1],
            [0, 0, 1, 1, 0, 1, 0, 1],
            [1, 1, 1, 0, 0, 0, 1, 0],
        ],
        dtype=np.uint8,
    )
