"""
Pytest configuration: ensure project root is on sys.path for imports and
provide helpers that write small SysCode tables to ``tmp_path``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

import pytest


def _add_repo_root_to_sys_path() -> None:
    # tests/ -> repo root
    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_add_repo_root_to_sys_path()

from syscodes.models import SYSCODE_ID_OFFSET  # noqa: E402


def code_row(raw_id: int, name: str, code: str = "", **labels: str) -> list[str]:
    """Build one row of the code table; labels default to variants of ``name``."""
    return [
        str(raw_id),
        "0",
        code or name.upper(),
        name,
        labels.get("german_short", f"{name} kurz"),
        labels.get("german_medium", f"{name} mittel"),
        labels.get("english_short", f"{name} short"),
        labels.get("english_medium", f"{name} medium"),
    ]


def write_table(path: Path, rows: Iterable[Sequence[str]]) -> Path:
    path.write_text("".join(";".join(row) + "\n" for row in rows), encoding="utf-8")
    return path


def sid(raw_id: int) -> int:
    return raw_id + SYSCODE_ID_OFFSET


@pytest.fixture
def sample_tables(tmp_path):
    """Code table with two groups and a subset table linking three members."""
    code_file = write_table(
        tmp_path / "syscode.csv",
        [
            code_row(100, "Currency", "CCY", german_medium="Währung", english_medium="Currency"),
            code_row(101, "CurrencyCHF", "CHF", german_medium="Schweizer Franken", english_medium="Swiss franc"),
            code_row(102, "CurrencyEUR", "EUR", german_medium="Euro", english_medium="Euro"),
            code_row(5000, "Country", "CTRY", german_medium="Land", english_medium="Country"),
            code_row(5001, "CountryCH", "CH", german_medium="Schweiz", english_medium="Switzerland"),
            code_row(5002, "CountryDE", "DE", german_medium="DE", english_medium="GERMANY"),
        ],
    )
    subset_file = write_table(
        tmp_path / "syssubset.csv",
        [
            ["Currency", "CurrencyEUR", "2", "0"],
            ["Currency", "CurrencyCHF", "1", "1"],
            ["Currency", "Unknown", "3", "0"],
        ],
    )
    return code_file, subset_file


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
