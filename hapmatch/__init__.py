"""hapmatch package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .errors import InvalidInput

try:  # pragma: no cover - best effort metadata lookup
    __version__ = version("hapmatch")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["InvalidInput", "__version__"]
