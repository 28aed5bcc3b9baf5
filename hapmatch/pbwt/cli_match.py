"""Command line interface for finding long haplotype matches."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

import click
import numpy as np

from ..config import RunConfig, load_yaml_config, to_dict, validate
from ..errors import InvalidInput
from ..io_.matrix import load_haplotypes
from ..io_.tables import arrays_to_frame, matches_to_frame, write_arrays, write_matches
from ..logging_ import configure_logging, get_logger, level_from_verbosity
from .matches import Match, filter_biallelic
from .sweep import build_all, find_all_long_matches

LOGGER = get_logger(__name__)


def _read_matrix(cfg: RunConfig) -> np.ndarray:
    if cfg.input.format == "vcf":
        from ..io_.vcf import load_vcf_haplotypes

        return load_vcf_haplotypes(cfg.input.path, cfg.input.samples).haps
    return load_haplotypes(cfg.input.path, cfg.input.format)


def run(cfg: RunConfig) -> Tuple[List[Match], np.ndarray, np.ndarray]:
    """Load the configured input and sweep it, returning matches and final arrays."""

    if not cfg.input.path:
        raise InvalidInput("no haplotype input given")
    haps = _read_matrix(cfg)
    n_sites, n_haplo = haps.shape
    LOGGER.info("Loaded %s haplotypes x %s sites from %s", n_haplo, n_sites, cfg.input.path)

    flat = haps.reshape(-1)
    if cfg.pbwt.k_site is None:
        result = build_all(flat, n_haplo, n_sites, cfg.pbwt.min_size)
        matches, prefix, divergence = result.matches, result.prefix, result.divergence
    else:
        matches, prefix, divergence = find_all_long_matches(flat, n_haplo, cfg.pbwt.k_site, cfg.pbwt.min_size)

    if cfg.pbwt.biallelic_only:
        kept = filter_biallelic(matches)
        LOGGER.info("Dropped %s single-allele matches", len(matches) - len(kept))
        matches = kept
    return matches, prefix, divergence


@click.command()
@click.option("--haps", "haps_path", type=click.Path(exists=True), required=False, help="Haplotype matrix")
@click.option("--format", "fmt", type=click.Choice(["txt", "npy", "vcf"]), required=False)
@click.option("--config", "config_path", type=click.Path(exists=True), required=False, help="YAML config file")
@click.option("--min-size", type=int, required=False, help="Minimum match length in sites")
@click.option("--k-site", type=int, required=False, help="Stop after this many sites")
@click.option("--biallelic-only", is_flag=True, default=False, help="Drop matches with one empty side")
@click.option("--out", "out_path", type=click.Path(), required=False, help="Match table (TSV)")
@click.option("--arrays", "arrays_path", type=click.Path(), required=False, help="Final prefix/divergence table")
@click.option("-v", "--verbose", count=True)
def cli_match(
    haps_path: Optional[str],
    fmt: Optional[str],
    config_path: Optional[str],
    min_size: Optional[int],
    k_site: Optional[int],
    biallelic_only: bool,
    out_path: Optional[str],
    arrays_path: Optional[str],
    verbose: int,
) -> None:
    """Sweep a haplotype matrix with the PBWT and report long matches."""

    configure_logging(level_from_verbosity(verbose))

    try:
        cfg = load_yaml_config(config_path) if config_path else RunConfig()
        if haps_path:
            cfg.input = replace(cfg.input, path=haps_path)
        if fmt:
            cfg.input = replace(cfg.input, format=fmt)
        if min_size is not None:
            cfg.pbwt = replace(cfg.pbwt, min_size=min_size)
        if k_site is not None:
            cfg.pbwt = replace(cfg.pbwt, k_site=k_site)
        if biallelic_only:
            cfg.pbwt = replace(cfg.pbwt, biallelic_only=True)
        if out_path:
            cfg.output = replace(cfg.output, matches=out_path)
        if arrays_path:
            cfg.output = replace(cfg.output, arrays=arrays_path)
        validate(cfg)
        LOGGER.debug("Run configuration: %s", to_dict(cfg))

        matches, prefix, divergence = run(cfg)
    except InvalidInput as exc:
        raise click.ClickException(str(exc)) from exc

    matches_file = Path(cfg.output.matches)
    matches_file.parent.mkdir(parents=True, exist_ok=True)
    write_matches(matches_file, matches_to_frame(matches))
    LOGGER.info("Wrote %s matches (min_size=%s) to %s", len(matches), cfg.pbwt.min_size, matches_file)

    if cfg.output.arrays:
        arrays_file = Path(cfg.output.arrays)
        arrays_file.parent.mkdir(parents=True, exist_ok=True)
        write_arrays(arrays_file, arrays_to_frame(prefix, divergence))
        LOGGER.info("Final prefix/divergence arrays saved to %s", arrays_file)


if __name__ == "__main__":
    cli_match()
