"""Numba-accelerated construction of PBWT prefix and divergence arrays."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
from numba import njit

from ..errors import InvalidInput
from ..logging_ import get_logger
from .fastarrays import ArrayLike, ensure_alleles, ensure_index, flatten_sites, site_column

LOGGER = get_logger(__name__)


@njit(cache=True)
def _advance(order: np.ndarray, div: np.ndarray, col: np.ndarray, site: int) -> Tuple[np.ndarray, np.ndarray, int]:
    n_haps = order.shape[0]
    next_order = np.empty(n_haps, dtype=np.int64)
    next_div = np.empty(n_haps, dtype=np.int64)
    ones = np.empty(n_haps, dtype=np.int64)
    ones_div = np.empty(n_haps, dtype=np.int64)

    n0 = 0
    n1 = 0
    # site + 1 marks "no shared run yet" and is never a valid start.
    p = site + 1
    q = site + 1

    for i in range(n_haps):
        hap_idx = order[i]
        start = div[i]
        if start > p:
            p = start
        if start > q:
            q = start
        if col[hap_idx] == 0:
            next_order[n0] = hap_idx
            next_div[n0] = p
            p = 0
            n0 += 1
        else:
            ones[n1] = hap_idx
            ones_div[n1] = q
            q = 0
            n1 += 1

    next_order[n0:] = ones[:n1]
    next_div[n0:] = ones_div[:n1]
    return next_order, next_div, n0


def initialize(n_haplo: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(a_0, d_0)``: the identity permutation and an all-zero divergence array."""

    if n_haplo <= 0:
        raise InvalidInput("n_haplo must be positive")
    return np.arange(n_haplo, dtype=np.int64), np.zeros(n_haplo, dtype=np.int64)


def _check_step_inputs(
    prefix: ArrayLike, divergence: ArrayLike, column: ArrayLike, site: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    prefix = ensure_index(prefix)
    divergence = ensure_index(divergence)
    column = ensure_alleles(column)
    if site < 0:
        raise InvalidInput(f"site index must be non-negative, got {site}")
    if not (prefix.ndim == divergence.ndim == column.ndim == 1):
        raise InvalidInput("prefix, divergence and allele column must be 1D")
    if not (prefix.shape[0] == divergence.shape[0] == column.shape[0]):
        raise InvalidInput(
            "prefix, divergence and allele column must have equal length "
            f"({prefix.shape[0]}, {divergence.shape[0]}, {column.shape[0]})"
        )
    if prefix.shape[0] == 0:
        raise InvalidInput("n_haplo must be positive")
    # the kernel indexes the column with these values unchecked
    if not np.array_equal(np.sort(prefix), np.arange(prefix.shape[0])):
        raise InvalidInput(f"prefix must be a permutation of [0, {prefix.shape[0]})")
    return prefix, divergence, column


def step(prefix: ArrayLike, divergence: ArrayLike, column: ArrayLike, site: int) -> Tuple[np.ndarray, np.ndarray]:
    """Advance ``(a_k, d_k)`` to ``(a_{k+1}, d_{k+1})`` using the alleles at ``site``.

    Parameters
    ----------
    prefix:
        Positional prefix array ``a_k`` (a permutation of haplotype indices).
    divergence:
        Divergence array ``d_k`` aligned to ``prefix``.
    column:
        Alleles (0/1) observed at site ``k``, indexed by haplotype.
    site:
        The site index ``k``.

    Returns
    -------
    prefix, divergence:
        Freshly allocated ``a_{k+1}`` and ``d_{k+1}``. The first entry of the
        new divergence array is the out-of-band sentinel ``k + 1``.
    """

    prefix, divergence, column = _check_step_inputs(prefix, divergence, column, site)
    next_prefix, next_div, _ = _advance(prefix, divergence, column, site)
    return next_prefix, next_div


def build_pbwt(haps: np.ndarray) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Build PBWT prefix/divergence arrays for every site of a haplotype matrix.

    Parameters
    ----------
    haps:
        Array shaped (sites, haplotypes) containing biallelic haplotypes encoded as 0/1.

    Returns
    -------
    prefix_arrays:
        ``[a_0, ..., a_{n_sites-1}]`` as ``int64`` arrays.
    divergence_arrays:
        ``[d_0, ..., d_{n_sites-1}]`` aligned to the prefix orderings.
    """

    flat, n_haplo, n_sites = flatten_sites(haps)
    if n_sites == 0 or n_haplo == 0:
        raise InvalidInput("haps must contain at least one site and one haplotype")

    prefix, divergence = initialize(n_haplo)
    prefix_arrays = [prefix]
    divergence_arrays = [divergence]
    for site in range(n_sites - 1):
        prefix, divergence, _ = _advance(prefix, divergence, site_column(flat, n_haplo, site), site)
        prefix_arrays.append(prefix)
        divergence_arrays.append(divergence)
    LOGGER.debug("Built PBWT arrays for %s haplotypes over %s sites", n_haplo, n_sites)
    return prefix_arrays, divergence_arrays


__all__ = ["build_pbwt", "initialize", "step"]
