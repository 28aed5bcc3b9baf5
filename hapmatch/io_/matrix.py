"""Reading plain haplotype matrices from text or ``.npy`` files."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ..errors import InvalidInput
from ..pbwt.fastarrays import ensure_alleles


def load_haplotypes(path: str | Path, fmt: str = "txt") -> np.ndarray:
    """Load a (sites, haplotypes) 0/1 matrix.

    ``txt`` files hold one whitespace-separated row per site; ``#`` starts a
    comment. ``npy`` files must contain a 2D array in the same orientation.
    """

    if fmt == "txt":
        haps = np.loadtxt(path, dtype=np.int64, comments="#", ndmin=2)
    elif fmt == "npy":
        haps = np.load(path, allow_pickle=False)
    else:
        raise InvalidInput(f"unsupported matrix format '{fmt}'")

    if haps.ndim != 2:
        raise InvalidInput(f"'{path}' must hold a 2D (sites, haplotypes) matrix")
    if haps.shape[0] == 0 or haps.shape[1] == 0:
        raise InvalidInput(f"'{path}' contains no haplotype data")
    return ensure_alleles(haps)


def save_haplotypes(path: str | Path, haps: np.ndarray) -> None:
    """Write a matrix in the ``txt`` layout read by :func:`load_haplotypes`."""

    np.savetxt(path, ensure_alleles(haps), fmt="%d", delimiter=" ")


__all__ = ["load_haplotypes", "save_haplotypes"]
