"""Validation and layout helpers for the contiguous arrays used in PBWT sweeps."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import InvalidInput

ArrayLike = Union[np.ndarray, Sequence[int]]


def ensure_alleles(values: ArrayLike) -> np.ndarray:
    """Check that every value is 0 or 1 and return a C-contiguous ``uint8`` copy.

    The check runs on the raw values, before the cast, so that ``-1`` or
    ``256`` cannot wrap into a valid allele.
    """

    raw = np.asarray(values)
    if raw.size and not np.isin(raw, (0, 1)).all():
        bad = np.unique(raw[~np.isin(raw, (0, 1))])
        raise InvalidInput(f"alleles must be 0 or 1, found {bad[:5].tolist()}")
    return np.ascontiguousarray(raw, dtype=np.uint8)


def ensure_index(values: ArrayLike) -> np.ndarray:
    """Ensure prefix/divergence arrays are ``int64`` and C-contiguous."""

    return np.ascontiguousarray(values, dtype=np.int64)


def flatten_sites(haps: np.ndarray) -> Tuple[np.ndarray, int, int]:
    """Flatten a (sites, haplotypes) matrix into site-major order.

    Returns the flat allele vector together with ``n_haplo`` and ``n_sites``.
    """

    haps = np.asarray(haps)
    if haps.ndim != 2:
        raise InvalidInput("haps must be a 2D array (sites, haplotypes)")
    n_sites, n_haplo = haps.shape
    return ensure_alleles(haps).reshape(-1), int(n_haplo), int(n_sites)


def site_column(flat: np.ndarray, n_haplo: int, site: int) -> np.ndarray:
    """Return the allele column of ``site`` from a flat site-major matrix."""

    return flat[site * n_haplo : (site + 1) * n_haplo]


__all__ = ["ArrayLike", "ensure_alleles", "ensure_index", "flatten_sites", "site_column"]
