"""Einlesen der semikolongetrennten SysCode-Tabellen.

Beide Exporte enthalten weder Kopfzeilen noch Escaping; jede Zeile ist ein
Datensatz, Felder werden stur an ``;`` getrennt. Die Dateien stammen aus
verschiedenen Exportwerkzeugen, daher wird die Kodierung tolerant erkannt.
"""

from __future__ import annotations

import codecs
import logging
import re
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _decode(raw: bytes) -> str:
    if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return raw.decode("utf-16")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Datei ist kein gueltiges UTF-8, lese als Windows-1252")
        return raw.decode("cp1252", errors="replace")


def split_row(line: str) -> List[str]:
    """Split ``line`` into its fields."""
    return line.split(FIELD_SEPARATOR)


def read_rows(path: str | Path) -> List[List[str]]:
    """Return all rows of the table at ``path`` as lists of fields.

    The whole file is read into memory. Only LF, CRLF and CR end a
    record; other Unicode line separators stay inside their field. A
    missing file raises ``OSError``.
    """
    p = Path(path)
    text = _decode(p.read_bytes())
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    rows = [split_row(line) for line in lines]
    logger.debug("%s: %d Zeilen gelesen", p, len(rows))
    return rows
