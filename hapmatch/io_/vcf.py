"""Phased VCF input built around :mod:`cyvcf2`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from cyvcf2 import VCF

from ..errors import InvalidInput


@dataclass(slots=True)
class VcfHaplotypes:
    """Haplotype matrix read from a VCF, with the coordinates of each site."""

    chrom: List[str]
    positions: np.ndarray
    haps: np.ndarray  # (sites, samples * 2)
    samples: List[str]


def open_vcf(path: str, samples: Optional[Sequence[str]] = None) -> VCF:
    """Open a VCF/BCF file via :class:`cyvcf2.VCF`."""

    try:
        vcf = VCF(path, samples=list(samples) if samples else None)
    except Exception as exc:  # pragma: no cover - cyvcf2 raises custom errors
        raise RuntimeError(f"Failed to open VCF '{path}': {exc}") from exc
    return vcf


def load_vcf_haplotypes(path: str, samples: Optional[Sequence[str]] = None) -> VcfHaplotypes:
    """Read phased biallelic genotypes as a (sites, 2 * samples) 0/1 matrix.

    Haplotype ``2 * j`` is the first allele of sample ``j`` and ``2 * j + 1``
    the second. Missing calls, unphased calls and multi-allelic records raise
    :class:`~hapmatch.errors.InvalidInput`.
    """

    vcf = open_vcf(path, samples)
    chrom: List[str] = []
    positions: List[int] = []
    rows: List[List[int]] = []

    try:
        for variant in vcf:
            where = f"{variant.CHROM}:{variant.POS}"
            if len(variant.ALT) > 1:
                raise InvalidInput(f"multi-allelic record at {where}")
            row: List[int] = []
            for call in variant.genotypes:
                if len(call) != 3:
                    raise InvalidInput(f"expected diploid calls at {where}")
                first, second, phased = call
                if first < 0 or second < 0:
                    raise InvalidInput(f"missing genotype at {where}")
                if not phased:
                    raise InvalidInput(f"unphased genotype at {where}")
                row.extend((first, second))
            chrom.append(str(variant.CHROM))
            positions.append(int(variant.POS))
            rows.append(row)
        sample_names = list(vcf.samples)
    finally:
        vcf.close()

    if not rows:
        raise InvalidInput(f"VCF '{path}' contains no variants")
    haps = np.asarray(rows, dtype=np.int64)
    if not np.isin(haps, (0, 1)).all():
        raise InvalidInput(f"VCF '{path}' contains non-biallelic allele codes")

    return VcfHaplotypes(
        chrom=chrom,
        positions=np.asarray(positions, dtype=np.int64),
        haps=haps.astype(np.uint8),
        samples=sample_names,
    )


__all__ = ["VcfHaplotypes", "load_vcf_haplotypes", "open_vcf"]
