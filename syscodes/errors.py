"""Exceptions raised while loading SysCode tables."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class MalformedRowError(ValueError):
    """A row is too short or carries a non-numeric value in a numeric field."""

    def __init__(self, row_number: int, reason: str, line: Optional[str] = None) -> None:
        self.row_number = row_number
        self.reason = reason
        self.line = line
        super().__init__(f"row {row_number}: {reason}")


class CatalogueLoadError(RuntimeError):
    """Loading one of the catalogue files failed; nothing was loaded."""

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause}")
