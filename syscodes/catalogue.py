"""In-Memory-Katalog der SysCodes mit Lookup, Suche und Übersetzungen.

``SysCodeCatalogue.parse`` liest Code- und Subset-Tabelle, baut daraus einen
vollständigen Schnappschuss und ersetzt den bisherigen erst, wenn beide
Dateien fehlerfrei verarbeitet wurden. Lesende Aufrufe sehen so immer einen
konsistenten Stand. Schlägt das Laden fehl, ist der Katalog danach leer.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Tuple

from .builder import GroupHeuristic, IdIndex, NameIndex, build_catalogue
from .errors import CatalogueLoadError, MalformedRowError
from .linker import link_subsets
from .models import SysCode
from .presenter import render_syscode, syscode_reference
from .reader import read_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    id_index: IdIndex = field(default_factory=dict)
    name_index: NameIndex = field(default_factory=dict)
    loaded: bool = False


def _is_all_uppercase(text: str) -> bool:
    return not any(ch.islower() for ch in text)


class SysCodeCatalogue:
    """Catalogue of SysCodes addressed by id and by name."""

    def __init__(self, heuristic: GroupHeuristic | None = None) -> None:
        self.heuristic = heuristic or GroupHeuristic()
        self._snapshot = _Snapshot()
        self._parse_lock = threading.Lock()

    def parse(self, code_file: str | Path, subset_file: str | Path) -> None:
        """Load both tables and replace the current catalogue.

        Raises:
            CatalogueLoadError: One of the files could not be read or holds a
                malformed row. The catalogue is empty afterwards.
        """
        with self._parse_lock:
            try:
                snapshot = self._load(Path(code_file), Path(subset_file))
            except CatalogueLoadError as exc:
                logger.error("FEHLER beim Laden der SysCodes: %s", exc)
                self._snapshot = _Snapshot()
                raise
            self._snapshot = snapshot

    def _load(self, code_file: Path, subset_file: Path) -> _Snapshot:
        logger.info("Lade SysCodes von %s", code_file)
        try:
            id_index, name_index = build_catalogue(read_rows(code_file), self.heuristic)
        except (OSError, MalformedRowError) as exc:
            raise CatalogueLoadError(code_file, exc) from exc

        logger.info("Lade Subsets von %s", subset_file)
        try:
            link_subsets(read_rows(subset_file), name_index)
        except (OSError, MalformedRowError) as exc:
            raise CatalogueLoadError(subset_file, exc) from exc

        return _Snapshot(id_index=id_index, name_index=name_index, loaded=True)

    @property
    def loaded(self) -> bool:
        return self._snapshot.loaded

    def __len__(self) -> int:
        return len(self._snapshot.id_index)

    @property
    def name_count(self) -> int:
        return len(self._snapshot.name_index)

    def get_syscode(self, syscode_id: int) -> Optional[SysCode]:
        return self._snapshot.id_index.get(syscode_id)

    def get_syscode_by_name(self, name: str) -> Optional[SysCode]:
        return self._snapshot.name_index.get(name)

    def find_syscodes(self, text: str) -> List[SysCode]:
        """Return codes whose ``code`` equals ``text`` or whose name contains it.

        Matching is case-sensitive; results follow the order of the code file.
        """
        return [
            syscode
            for syscode in self._snapshot.id_index.values()
            if syscode.code == text or text in syscode.name
        ]

    @property
    def translations(self) -> Set[Tuple[str, str]]:
        """Alle ``(englisch, deutsch)``-Paare der mittleren Bezeichnungen.

        Paare, bei denen eine Seite keinen Kleinbuchstaben enthält (Kürzel
        oder leer), werden ausgelassen.
        """
        result: Set[Tuple[str, str]] = set()
        for syscode in self._snapshot.id_index.values():
            if _is_all_uppercase(syscode.english_medium) or _is_all_uppercase(syscode.german_medium):
                continue
            result.add((syscode.english_medium, syscode.german_medium))
        return result

    def render(self, syscode: SysCode) -> str:
        return render_syscode(syscode, self._snapshot.id_index.get)

    def reference_line(self, syscode_id: int) -> str:
        return syscode_reference(syscode_id, self._snapshot.id_index.get)
