"""Dataclasses representing SysCode catalogue structures."""

from dataclasses import dataclass, field
from typing import List

# Raw ids from the catalogue file are shifted into the reserved SysCode id space.
SYSCODE_ID_OFFSET = 0x1051_0000_0000_0000


@dataclass(frozen=True)
class SubsetEntry:
    """Member of a subset.

    Attributes:
        id: SysCode id of the member.
        sort_number: Position hint from the subset file. Entries are kept in
            file order; the number is informational only.
        default_entry: Whether the member is the subset's default choice.
    """

    id: int
    sort_number: int
    default_entry: bool


@dataclass(frozen=True)
class SysCode:
    """Single row of the SysCode catalogue.

    Scalar fields cannot be reassigned after construction. ``children`` and
    ``subset_entries`` are filled in while the catalogue is built and only
    ever grow. Related codes are referenced by id and resolved through the
    catalogue, never held directly.

    Attributes:
        id: Unique SysCode id (raw id plus :data:`SYSCODE_ID_OFFSET`).
        group_id: Id of the inferred group header; may not resolve.
        code: Short symbolic code, not necessarily unique.
        name: Technical name, used as second lookup key.
        german_short: Short German label.
        german_medium: Medium-length German label.
        english_short: Short English label.
        english_medium: Medium-length English label.
        children: Ids of the codes that belong to this group, in file order.
        subset_entries: Members if this code is referenced as a subset.
    """

    id: int
    group_id: int
    code: str
    name: str
    german_short: str
    german_medium: str
    english_short: str
    english_medium: str
    children: List[int] = field(default_factory=list, compare=False)
    subset_entries: List[SubsetEntry] = field(default_factory=list, compare=False)


def parse_syscode_id(text: str) -> int:
    """Parse a SysCode id given as decimal, ``0x`` hex or bare hex.

    Ids consisting only of digits are read as decimal.
    """
    value = text.strip().lower()
    if value.startswith(("0x", "-0x")):
        return int(value, 16)
    if value.lstrip("-").isdigit():
        return int(value)
    return int(value, 16)
