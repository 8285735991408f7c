"""Structured parsing errors for the extraction layer.

Extractors absorb cell-level problems (defaulting to 0 / empty); these are
raised by strict helpers and structural checks only.
"""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for parsing related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class MissingSectionError(ParsingError):
    """Raised when an expected HTML section is absent."""

