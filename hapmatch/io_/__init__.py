"""Input/Output helpers for hapmatch.

The VCF reader lives in :mod:`hapmatch.io_.vcf` and is imported on demand so
that htslib is only loaded when VCF input is actually used.
"""

from . import matrix, tables
from .matrix import load_haplotypes, save_haplotypes
from .tables import ARRAY_COLUMNS, MATCH_COLUMNS, arrays_to_frame, matches_to_frame, write_arrays, write_matches

__all__ = [
    "ARRAY_COLUMNS",
    "MATCH_COLUMNS",
    "arrays_to_frame",
    "matches_to_frame",
    "write_arrays",
    "write_matches",
    "load_haplotypes",
    "save_haplotypes",
    "matrix",
    "tables",
]
