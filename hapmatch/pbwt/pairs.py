"""Pairwise views over PBWT orderings, including a quadratic reference scan."""

from __future__ import annotations

from typing import Iterable, Set

import numpy as np

from ..errors import InvalidInput
from .fastarrays import ensure_alleles
from .matches import Pair


def prefix_ranks(prefix_arrays: Iterable[np.ndarray]) -> np.ndarray:
    """Invert each prefix array: ``ranks[k, h]`` is the position of ``h`` in ``a_k``."""

    orders = list(prefix_arrays)
    n_sites = len(orders)
    if n_sites == 0:
        return np.empty((0, 0), dtype=np.int64)
    n_haps = int(orders[0].shape[0])
    ranks = np.zeros((n_sites, n_haps), dtype=np.int64)
    for site, order in enumerate(orders):
        ranks[site, order] = np.arange(n_haps, dtype=np.int64)
    return ranks


def shared_suffix_length(haps: np.ndarray, a: int, b: int, site: int) -> int:
    """Number of consecutive sites ending at ``site - 1`` where ``a`` and ``b`` agree."""

    diff = np.flatnonzero(haps[:site, a] != haps[:site, b])
    if diff.size == 0:
        return int(site)
    return int(site - diff[-1] - 1)


def brute_force_pairs(haps: np.ndarray, min_size: int) -> Set[Pair]:
    """Pairs sharing at least ``min_size`` identical sites before some site ``k < n_sites - 1``.

    Compares every pair at every site, so it is only meant for small
    matrices, where it serves as a reference for the PBWT sweep.
    """

    if min_size <= 0:
        raise InvalidInput(f"min_size must be at least 1, got {min_size}")
    haps = ensure_alleles(haps)
    if haps.ndim != 2:
        raise InvalidInput("haps must be a 2D array (sites, haplotypes)")

    n_sites, n_haps = haps.shape
    pairs: Set[Pair] = set()
    for a in range(n_haps):
        for b in range(a + 1, n_haps):
            for site in range(n_sites - 1):
                if shared_suffix_length(haps, a, b, site) >= min_size:
                    pairs.add((a, b))
                    break
    return pairs


__all__ = ["brute_force_pairs", "prefix_ranks", "shared_suffix_length"]
