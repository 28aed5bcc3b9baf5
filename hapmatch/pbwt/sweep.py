"""Left-to-right sweeps over a flat, site-major haplotype matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..errors import InvalidInput
from ..logging_ import get_logger
from .fastarrays import ArrayLike, ensure_alleles, site_column
from .matches import Match, _check_min_size, _collect_matches
from .pbwt_core import _advance, initialize

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class SweepResult:
    """Final PBWT arrays of a sweep and the matches emitted along the way."""

    prefix: np.ndarray
    divergence: np.ndarray
    matches: List[Match] = field(default_factory=list)


def _flat_matrix(haplotypes: ArrayLike, n_haplo: int) -> np.ndarray:
    if n_haplo <= 0:
        raise InvalidInput("n_haplo must be positive")
    return ensure_alleles(np.asarray(haplotypes).reshape(-1))


def _sweep(flat: np.ndarray, n_haplo: int, n_steps: int, min_size: Optional[int]) -> SweepResult:
    prefix, divergence = initialize(n_haplo)
    matches: List[Match] = []
    for site in range(n_steps):
        column = site_column(flat, n_haplo, site)
        if min_size is not None:
            matches.extend(_collect_matches(prefix, divergence, column, site, min_size))
        prefix, divergence, _ = _advance(prefix, divergence, column, site)
    return SweepResult(prefix=prefix, divergence=divergence, matches=matches)


def build_all(
    haplotypes: ArrayLike,
    n_haplo: int,
    n_sites: int,
    min_size: Optional[int] = None,
) -> SweepResult:
    """Run ``n_sites - 1`` transitions over the whole matrix.

    With ``min_size`` set every transition also reports long matches (see
    :func:`~hapmatch.pbwt.matches.find_long_matches`); without it only the
    arrays are built and ``matches`` stays empty.
    """

    if n_sites <= 0:
        raise InvalidInput("n_sites must be positive")
    flat = _flat_matrix(haplotypes, n_haplo)
    if flat.shape[0] != n_haplo * n_sites:
        raise InvalidInput(
            f"haplotype matrix has {flat.shape[0]} values, expected {n_haplo} x {n_sites}"
        )
    if min_size is not None:
        _check_min_size(min_size)

    result = _sweep(flat, n_haplo, n_sites - 1, min_size)
    LOGGER.debug(
        "Swept %s haplotypes over %s sites (min_size=%s): %s matches",
        n_haplo,
        n_sites,
        min_size,
        len(result.matches),
    )
    return result


def find_all_long_matches(
    haplotypes: ArrayLike, n_haplo: int, k_site: int, min_size: int
) -> Tuple[List[Match], np.ndarray, np.ndarray]:
    """Collect long matches and return ``a_{k_site-1}`` and ``d_{k_site-1}``.

    ``haplotypes`` is the flat site-major matrix; its number of sites is
    inferred from ``n_haplo``. ``k_site`` counts processed sites and must lie
    in ``[1, n_sites]``: ``k_site == 1`` returns the initial arrays and
    ``k_site == n_sites`` sweeps the whole matrix.
    """

    _check_min_size(min_size)
    flat = _flat_matrix(haplotypes, n_haplo)
    if flat.shape[0] == 0 or flat.shape[0] % n_haplo:
        raise InvalidInput(
            f"haplotype matrix length {flat.shape[0]} is not a positive multiple of n_haplo={n_haplo}"
        )
    n_sites = flat.shape[0] // n_haplo
    if not 1 <= k_site <= n_sites:
        raise InvalidInput(f"k_site must lie in [1, {n_sites}], got {k_site}")

    result = _sweep(flat, n_haplo, k_site - 1, min_size)
    return result.matches, result.prefix, result.divergence


__all__ = ["SweepResult", "build_all", "find_all_long_matches"]
