"""Verknüpfung der Subset-Tabelle mit dem aufgebauten Katalog."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from .builder import INT32_RANGE, parse_int
from .errors import MalformedRowError
from .models import SubsetEntry, SysCode
from .reader import FIELD_SEPARATOR

logger = logging.getLogger(__name__)

SUBSET_ROW_MIN_FIELDS = 4


def link_subsets(rows: Iterable[Sequence[str]], name_index: Mapping[str, SysCode]) -> int:
    """Append the members listed in ``rows`` to their subset codes.

    Each row names a subset and a member by their SysCode names. Rows where
    either name is unknown are skipped without error. Entries keep the order
    of the file.

    Returns:
        Number of subset entries that were attached.

    Raises:
        MalformedRowError: A row is too short or its sort number or default
            flag is not a 32-bit integer.
    """
    linked = 0
    skipped = 0
    for row_number, fields in enumerate(rows, start=1):
        if len(fields) < SUBSET_ROW_MIN_FIELDS:
            raise MalformedRowError(
                row_number,
                f"expected at least {SUBSET_ROW_MIN_FIELDS} fields, got {len(fields)}",
                FIELD_SEPARATOR.join(fields),
            )
        subset_name, entry_name = fields[0], fields[1]
        sort_number = parse_int(fields[2], row_number, "sort number", *INT32_RANGE)
        default_entry = parse_int(fields[3], row_number, "default flag", *INT32_RANGE) != 0

        subset = name_index.get(subset_name)
        entry = name_index.get(entry_name)
        if subset is None or entry is None:
            skipped += 1
            logger.debug(
                "Subset-Zeile %d übersprungen: %r / %r nicht gefunden",
                row_number,
                subset_name,
                entry_name,
            )
            continue

        subset.subset_entries.append(
            SubsetEntry(id=entry.id, sort_number=sort_number, default_entry=default_entry)
        )
        linked += 1

    logger.info("Subsets verknüpft: %d Einträge, %d übersprungen", linked, skipped)
    return linked
