"""Exception types raised by hapmatch."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when haplotype data or sweep parameters are malformed."""


__all__ = ["InvalidInput"]
