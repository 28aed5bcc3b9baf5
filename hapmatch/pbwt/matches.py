"""Long-match detection layered on top of the PBWT transition."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Set, Tuple

import numpy as np

from ..errors import InvalidInput
from .fastarrays import ArrayLike
from .pbwt_core import _advance, _check_step_inputs

Pair = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Match:
    """A group of haplotypes identical over at least ``min_size`` sites before ``end``.

    ``haplo_a`` holds the members carrying allele 0 at site ``end`` and
    ``haplo_b`` those carrying allele 1, each in prefix order.
    """

    haplo_a: Tuple[int, ...]
    haplo_b: Tuple[int, ...]
    end: int

    @property
    def size(self) -> int:
        return len(self.haplo_a) + len(self.haplo_b)

    @property
    def is_biallelic(self) -> bool:
        """True when the group splits on both alleles at ``end``."""

        return bool(self.haplo_a) and bool(self.haplo_b)

    def members(self) -> Tuple[int, ...]:
        return self.haplo_a + self.haplo_b

    def pairs(self) -> Set[Pair]:
        """All unordered member pairs, smaller index first."""

        return {(min(a, b), max(a, b)) for a, b in combinations(self.members(), 2)}

    def diverging_pairs(self) -> Set[Pair]:
        """Pairs whose shared run ends at ``end`` because their alleles differ there."""

        return {(min(a, b), max(a, b)) for a in self.haplo_a for b in self.haplo_b}


def _check_min_size(min_size: int) -> None:
    if min_size <= 0:
        raise InvalidInput(f"min_size must be at least 1, got {min_size}")


def _collect_matches(
    prefix: np.ndarray, divergence: np.ndarray, column: np.ndarray, site: int, min_size: int
) -> List[Match]:
    # A run breaks wherever the shared history with the predecessor is too short.
    breaks = np.flatnonzero(divergence + min_size > site)
    bounds = np.union1d(breaks, [0, prefix.shape[0]])

    matches: List[Match] = []
    for lo, hi in zip(bounds[:-1], bounds[1:]):
        # a lone haplotype implies no pair
        if hi - lo < 2:
            continue
        group = prefix[lo:hi]
        alleles = column[group]
        matches.append(
            Match(
                haplo_a=tuple(group[alleles == 0].tolist()),
                haplo_b=tuple(group[alleles == 1].tolist()),
                end=int(site),
            )
        )
    return matches


def find_long_matches(
    prefix: ArrayLike,
    divergence: ArrayLike,
    column: ArrayLike,
    site: int,
    min_size: int,
) -> Tuple[List[Match], np.ndarray, np.ndarray]:
    """Report long matches ending at ``site`` and advance the PBWT arrays.

    Parameters
    ----------
    prefix, divergence:
        ``a_k`` and ``d_k`` for ``site`` = ``k``.
    column:
        Alleles (0/1) at ``site``, indexed by haplotype.
    site:
        The site index ``k``.
    min_size:
        Minimum number of identical sites, counted backwards from ``site``,
        for adjacent haplotypes to stay in the same match.

    Returns
    -------
    matches:
        Matches in prefix order, each with ``end == site``. A match whose
        members all carry the same allele is still reported.
    prefix, divergence:
        ``a_{k+1}`` and ``d_{k+1}``, identical to :func:`step`.
    """

    _check_min_size(min_size)
    prefix, divergence, column = _check_step_inputs(prefix, divergence, column, site)
    matches = _collect_matches(prefix, divergence, column, site, min_size)
    next_prefix, next_div, _ = _advance(prefix, divergence, column, site)
    return matches, next_prefix, next_div


def match_pairs(matches: Iterable[Match]) -> Set[Pair]:
    """Union of the unordered haplotype pairs implied by ``matches``."""

    pairs: Set[Pair] = set()
    for match in matches:
        pairs |= match.pairs()
    return pairs


def filter_biallelic(matches: Iterable[Match]) -> List[Match]:
    """Keep only matches with members on both sides of the split."""

    return [match for match in matches if match.is_biallelic]


__all__ = ["Match", "Pair", "filter_biallelic", "find_long_matches", "match_pairs"]
