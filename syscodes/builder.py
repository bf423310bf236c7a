"""Aufbau des SysCode-Katalogs aus der flachen Codetabelle.

Die Exportdatei kennt keine expliziten Elternverweise. Gruppen werden deshalb
in einem einzigen Durchlauf aus der Reihenfolge der Ids abgeleitet: innerhalb
einer Gruppe steigen die Ids in kleinen Schritten, eine neue Gruppe beginnt
mit einem Sprung rückwärts oder mit einer Lücke im Bereich
``[min_gap, max_gap)``.

Eine Zeile, deren Id kleiner Abstand zum Vorgänger hat, aber eigentlich zu
einer anderen Gruppe gehört, wird der laufenden Gruppe zugeordnet. Die
Exporte sind so sortiert, dass dieser Fall nicht auftritt.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .errors import MalformedRowError
from .models import SYSCODE_ID_OFFSET, SysCode
from .reader import FIELD_SEPARATOR

logger = logging.getLogger(__name__)

CODE_ROW_MIN_FIELDS = 8

DEFAULT_MIN_GROUP_GAP = 0x900
DEFAULT_MAX_GROUP_GAP = 0x10000

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
INT32_RANGE = (_INT32_MIN, _INT32_MAX)
_INT_RE = re.compile(r"[+-]?\d+")

IdIndex = Dict[int, SysCode]
NameIndex = Dict[str, SysCode]


def parse_int(
    value: str,
    row_number: int,
    field_name: str,
    minimum: int = _INT64_MIN,
    maximum: int = _INT64_MAX,
) -> int:
    """Parse an integer field in ``[minimum, maximum]`` or raise :class:`MalformedRowError`.

    The default range is signed 64 bit.
    """
    if not _INT_RE.fullmatch(value):
        raise MalformedRowError(row_number, f"{field_name} is not an integer: {value!r}")
    number = int(value)
    if not minimum <= number <= maximum:
        raise MalformedRowError(row_number, f"{field_name} out of range: {value!r}")
    return number


@dataclass(frozen=True)
class GroupHeuristic:
    """Decides from the id step between two rows whether a new group starts."""

    min_gap: int = DEFAULT_MIN_GROUP_GAP
    max_gap: int = DEFAULT_MAX_GROUP_GAP

    def starts_group(self, syscode_id: int, last_id: Optional[int]) -> bool:
        if last_id is None:
            return True
        delta = syscode_id - last_id
        return delta < 0 or self.min_gap <= delta < self.max_gap


def build_catalogue(
    rows: Iterable[Sequence[str]],
    heuristic: GroupHeuristic | None = None,
) -> Tuple[IdIndex, NameIndex]:
    """Build the id and name indexes from the rows of the code table.

    Later rows overwrite earlier ones under the same id or name. A row is
    appended to the ``children`` of its group header when the header is
    already known; orphan groups are silently tolerated.

    Raises:
        MalformedRowError: A row has fewer than eight fields or a
            non-numeric id. Nothing is returned in that case.
    """
    heuristic = heuristic or GroupHeuristic()
    id_index: IdIndex = {}
    name_index: NameIndex = {}

    last_id: Optional[int] = None
    group_id = 0

    for row_number, fields in enumerate(rows, start=1):
        if len(fields) < CODE_ROW_MIN_FIELDS:
            raise MalformedRowError(
                row_number,
                f"expected at least {CODE_ROW_MIN_FIELDS} fields, got {len(fields)}",
                FIELD_SEPARATOR.join(fields),
            )
        syscode_id = parse_int(fields[0], row_number, "id") + SYSCODE_ID_OFFSET
        if heuristic.starts_group(syscode_id, last_id):
            group_id = syscode_id

        syscode = SysCode(
            id=syscode_id,
            group_id=group_id,
            code=fields[2],
            name=fields[3],
            german_short=fields[4],
            german_medium=fields[5],
            english_short=fields[6],
            english_medium=fields[7],
        )
        id_index[syscode_id] = syscode
        name_index[syscode.name] = syscode

        group = id_index.get(group_id)
        if group is not None and group is not syscode:
            group.children.append(syscode_id)
        last_id = syscode_id

    logger.info(
        "SysCodes aufgebaut: %d Ids, %d Namen, %d Gruppen",
        len(id_index),
        len(name_index),
        sum(1 for s in id_index.values() if s.children),
    )
    return id_index, name_index
