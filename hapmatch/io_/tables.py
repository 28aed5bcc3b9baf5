"""Tabular output of long matches and PBWT arrays."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import numpy as np
import pandas as pd

from ..pbwt.matches import Match

MATCH_COLUMNS = ["end", "n_haplo_a", "n_haplo_b", "haplo_a", "haplo_b"]
ARRAY_COLUMNS = ["position", "prefix", "divergence"]


def _join(indices: Iterable[int]) -> str:
    return ",".join(str(i) for i in indices)


def matches_to_frame(matches: Iterable[Match]) -> pd.DataFrame:
    """One row per match; member lists are comma-joined haplotype indices."""

    rows: List[dict[str, object]] = [
        {
            "end": match.end,
            "n_haplo_a": len(match.haplo_a),
            "n_haplo_b": len(match.haplo_b),
            "haplo_a": _join(match.haplo_a),
            "haplo_b": _join(match.haplo_b),
        }
        for match in matches
    ]
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def arrays_to_frame(prefix: np.ndarray, divergence: np.ndarray) -> pd.DataFrame:
    """Side-by-side prefix and divergence arrays."""

    if prefix.shape != divergence.shape:
        raise ValueError("prefix and divergence arrays must align")
    return pd.DataFrame(
        {
            "position": np.arange(prefix.shape[0], dtype=np.int64),
            "prefix": prefix,
            "divergence": divergence,
        },
        columns=ARRAY_COLUMNS,
    )


def _write_tsv(path: str | Path, df: pd.DataFrame, columns: List[str]) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing columns: {missing}")
    df[columns].to_csv(path, sep="\t", index=False)


def write_matches(path: str | Path, df: pd.DataFrame) -> None:
    """Write a match table with enforced columns and a header row."""

    _write_tsv(path, df, MATCH_COLUMNS)


def write_arrays(path: str | Path, df: pd.DataFrame) -> None:
    _write_tsv(path, df, ARRAY_COLUMNS)


__all__ = [
    "ARRAY_COLUMNS",
    "MATCH_COLUMNS",
    "arrays_to_frame",
    "matches_to_frame",
    "write_arrays",
    "write_matches",
]
