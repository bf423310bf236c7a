"""Flask-Anwendung für Abfragen im SysCode-Katalog.

Der Server lädt Code- und Subset-Tabelle einmal beim Start und stellt Lookup
per Id, Suche, Übersetzungspaare und die Textdarstellung eines Codes als
JSON- bzw. Text-Endpunkte bereit. ``/api/reload`` lädt die konfigurierten
Dateien neu; der Katalog tauscht dabei seinen Stand erst nach vollständigem
Laden aus.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, abort, jsonify, request
from flask_compress import Compress

from syscodes import CatalogueLoadError, SysCode, SysCodeCatalogue, parse_syscode_id
from syscodes.config import SysCodeSettings, load_settings
from syscodes.logging_setup import configure_logging

logger = logging.getLogger(__name__)

CATALOGUE_EXTENSION = "syscodes"


def syscode_to_dict(syscode: SysCode) -> Dict[str, Any]:
    """Serialisiert einen SysCode; Ids zusätzlich hexadezimal."""
    return {
        "id": syscode.id,
        "hex_id": f"{syscode.id:x}",
        "group_id": syscode.group_id,
        "code": syscode.code,
        "name": syscode.name,
        "german_short": syscode.german_short,
        "german_medium": syscode.german_medium,
        "english_short": syscode.english_short,
        "english_medium": syscode.english_medium,
        "children": list(syscode.children),
        "subset_entries": [
            {"id": entry.id, "sort_number": entry.sort_number, "default_entry": entry.default_entry}
            for entry in syscode.subset_entries
        ],
    }


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, str(default)))
    except ValueError:
        return default


def create_app(
    catalogue: Optional[SysCodeCatalogue] = None,
    settings: Optional[SysCodeSettings] = None,
) -> Flask:
    """
    Erstellt die Flask-Instanz.
    Ohne übergebenen Katalog werden die in ``config.ini`` konfigurierten
    Tabellen geladen; schlägt das fehl, startet der Server nicht.
    """
    settings = settings or load_settings()
    if catalogue is None:
        catalogue = SysCodeCatalogue(settings.heuristic)
        logger.info("Initialer Daten-Load beim App-Start …")
        try:
            catalogue.parse(settings.code_file, settings.subset_file)
        except CatalogueLoadError as exc:
            raise RuntimeError(f"Kritische Daten konnten nicht geladen werden: {exc}") from exc

    app = Flask(__name__)
    app.json.ensure_ascii = False  # type: ignore[attr-defined]
    app.extensions[CATALOGUE_EXTENSION] = catalogue
    Compress(app)

    @app.route("/api/status")
    def status() -> Any:
        """Ladezustand und Umfang des Katalogs."""
        return jsonify({
            "loaded": catalogue.loaded,
            "syscodes": len(catalogue),
            "names": catalogue.name_count,
        })

    @app.route("/api/syscode")
    def search_syscodes() -> Any:
        """Return syscodes matching ``q`` by exact code or name substring."""
        term = request.args.get("q", "")
        offset = max(0, _int_arg("offset", 0))
        limit = _int_arg("limit", settings.search_limit)
        if limit <= 0:
            limit = settings.search_limit
        results = catalogue.find_syscodes(term)[offset:offset + limit]
        return jsonify([syscode_to_dict(s) for s in results])

    @app.route("/api/syscode/<raw_id>")
    def get_syscode(raw_id: str) -> Any:
        """Return one syscode by decimal or hex id."""
        syscode = _lookup_or_404(raw_id)
        return jsonify(syscode_to_dict(syscode))

    @app.route("/api/syscode/<raw_id>/message")
    def get_syscode_message(raw_id: str) -> Any:
        """Return the rendered text description of one syscode."""
        syscode = _lookup_or_404(raw_id)
        return Response(catalogue.render(syscode), mimetype="text/plain; charset=utf-8")

    @app.route("/api/translations")
    def list_translations() -> Any:
        """Return all english/german translation pairs, sorted by english text."""
        return jsonify([
            {"english": english, "german": german}
            for english, german in sorted(catalogue.translations)
        ])

    @app.route("/api/reload", methods=["POST"])
    def reload_catalogue() -> Any:
        """Re-read the configured tables."""
        try:
            catalogue.parse(settings.code_file, settings.subset_file)
        except CatalogueLoadError as exc:
            return jsonify({"loaded": False, "error": str(exc)}), 500
        return jsonify({"loaded": True, "syscodes": len(catalogue)})

    def _lookup_or_404(raw_id: str) -> SysCode:
        try:
            syscode_id = parse_syscode_id(raw_id)
        except ValueError:
            abort(400, description=f"invalid syscode id: {raw_id}")
        syscode = catalogue.get_syscode(syscode_id)
        if syscode is None:
            abort(404, description=f"syscode {syscode_id:x} not found")
        return syscode

    return app


def _run_local() -> None:
    """Lokaler Debug-Server."""
    settings = load_settings()
    configure_logging(settings)
    app = create_app(settings=settings)
    logger.warning("Lokal verfügbar auf http://127.0.0.1:%s", settings.port)
    app.run(host="0.0.0.0", port=settings.port, debug=True)


if __name__ == "__main__":
    _run_local()
