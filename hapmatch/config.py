"""Configuration schemas and helpers for hapmatch runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, MutableMapping, Optional, Type, TypeVar, Union

import yaml

from .errors import InvalidInput


@dataclass(slots=True)
class PBWTConfig:
    """Parameters of the long-match sweep."""

    min_size: int = 3
    k_site: Optional[int] = None
    biallelic_only: bool = False


@dataclass(slots=True)
class InputConfig:
    """Where the haplotype matrix comes from."""

    path: Optional[str] = None
    format: Literal["txt", "npy", "vcf"] = "txt"
    samples: Optional[list] = None


@dataclass(slots=True)
class OutputConfig:
    """Output tables written by the command line."""

    matches: str = "matches.tsv"
    arrays: Optional[str] = None


@dataclass(slots=True)
class RunConfig:
    """Top-level configuration container."""

    pbwt: PBWTConfig = field(default_factory=PBWTConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


T = TypeVar("T")


def to_dict(cfg: RunConfig) -> Dict[str, Any]:
    """Convert a config object into a dict for logging/serialization."""

    return asdict(cfg)


def _merge_dict(base: MutableMapping[str, Any], override: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            _merge_dict(base[key], value)  # type: ignore[index]
        else:
            base[key] = value
    return base


def _build_dataclass(cls: Type[T], payload: Mapping[str, Any]) -> T:
    field_names = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    kwargs = {k: v for k, v in payload.items() if k in field_names}
    return cls(**kwargs)  # type: ignore[arg-type]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(cfg: RunConfig) -> RunConfig:
    """Reject parameter values the sweep cannot run with."""

    if not _is_int(cfg.pbwt.min_size) or cfg.pbwt.min_size <= 0:
        raise InvalidInput(f"pbwt.min_size must be an integer of at least 1, got {cfg.pbwt.min_size!r}")
    if cfg.pbwt.k_site is not None and (not _is_int(cfg.pbwt.k_site) or cfg.pbwt.k_site <= 0):
        raise InvalidInput(f"pbwt.k_site must be a positive integer, got {cfg.pbwt.k_site!r}")
    if not isinstance(cfg.pbwt.biallelic_only, bool):
        raise InvalidInput(f"pbwt.biallelic_only must be true or false, got {cfg.pbwt.biallelic_only!r}")
    if cfg.input.format not in ("txt", "npy", "vcf"):
        raise InvalidInput(f"unknown input format '{cfg.input.format}'")
    return cfg


def load_yaml_config(path: Union[str, Path]) -> RunConfig:
    """Load a :class:`RunConfig` from a YAML file, filling in defaults."""

    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    merged = _merge_dict(to_dict(RunConfig()), raw)

    return validate(
        RunConfig(
            pbwt=_build_dataclass(PBWTConfig, merged.get("pbwt") or {}),
            input=_build_dataclass(InputConfig, merged.get("input") or {}),
            output=_build_dataclass(OutputConfig, merged.get("output") or {}),
        )
    )


__all__ = [
    "PBWTConfig",
    "InputConfig",
    "OutputConfig",
    "RunConfig",
    "load_yaml_config",
    "to_dict",
    "validate",
]
