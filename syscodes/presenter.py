"""Text rendering of SysCodes for chat and console output.

The output uses Slack-style markup: backticks around technical names and
underscores around translations.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, TypeVar

from .models import SysCode

T = TypeVar("T")

SysCodeLookup = Callable[[int], Optional[SysCode]]

LISTING_LIMIT = 10


def plural(count: int, singular: str, plural_form: str) -> str:
    return singular if count == 1 else plural_form


def limited_listing(
    items: Sequence[T],
    render_item: Callable[[T], str],
    render_skipped: Callable[[int], str],
    limit: int = LISTING_LIMIT,
) -> List[str]:
    """Render at most ``limit`` items plus one line for the rest, if any."""
    limit = max(limit, 0)
    lines = [render_item(item) for item in items[:limit]]
    skipped = len(items) - limit
    if skipped > 0:
        lines.append(render_skipped(skipped))
    return lines


def syscode_reference(syscode_id: int, lookup: SysCodeLookup) -> str:
    """Return ``<hex id> `<name>``` for ``syscode_id``; unknown ids get an empty name."""
    syscode = lookup(syscode_id)
    name = syscode.name if syscode is not None else ""
    return f"{syscode_id:x} `{name}`"


def render_syscode(syscode: SysCode, lookup: SysCodeLookup, limit: int = LISTING_LIMIT) -> str:
    """Gibt eine mehrzeilige Beschreibung von ``syscode`` zurück.

    Gruppe, Kinder und Subset-Einträge werden über ``lookup`` aufgelöst.
    Kinder und Subset-Einträge werden nach ``limit`` Zeilen abgeschnitten.
    """
    lines = [
        f"Syscode {syscode.id:x} = decimal {syscode.id}",
        f"\tcode: `{syscode.code}`",
        f"\tname: `{syscode.name}`",
        f"\tshort translation: _{syscode.german_short}_ : _{syscode.english_short}_",
        f"\tmedium translation: _{syscode.german_medium}_ : _{syscode.english_medium}_",
    ]

    group_line = f"\tgroup: {syscode.group_id:x}"
    group = lookup(syscode.group_id)
    if group is not None:
        group_line += f" `{group.name}`"
    lines.append(group_line)

    if syscode.children:
        count = len(syscode.children)
        lines.append(f"\t{count} group {plural(count, 'member', 'members')} found")
        lines.extend(
            limited_listing(
                syscode.children,
                lambda child_id: f"\t\t{syscode_reference(child_id, lookup)}",
                lambda skipped: f"\t\t... _(skipping {skipped} {plural(skipped, 'member', 'members')})_",
                limit,
            )
        )

    if syscode.subset_entries:
        count = len(syscode.subset_entries)
        lines.append(f"\t{count} subset {plural(count, 'entry', 'entries')} found")
        lines.extend(
            limited_listing(
                syscode.subset_entries,
                lambda entry: f"\t\t{syscode_reference(entry.id, lookup)}",
                lambda skipped: f"\t\t... _(skipping {skipped} {plural(skipped, 'entry', 'entries')})_",
                limit,
            )
        )

    return "\n".join(lines) + "\n"
