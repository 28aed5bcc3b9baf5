"""PBWT construction and long-match detection."""

from .matches import Match, filter_biallelic, find_long_matches, match_pairs
from .pairs import brute_force_pairs, prefix_ranks
from .pbwt_core import build_pbwt, initialize, step
from .sweep import SweepResult, build_all, find_all_long_matches

__all__ = [
    "Match",
    "SweepResult",
    "brute_force_pairs",
    "build_all",
    "build_pbwt",
    "filter_biallelic",
    "find_all_long_matches",
    "find_long_matches",
    "initialize",
    "match_pairs",
    "prefix_ranks",
    "step",
]
