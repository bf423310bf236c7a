"""Konfiguration der SysCode-Komponente.

Grundlage ist ``config.ini`` im Projektverzeichnis (Pfad über
``SYSCODES_CONFIG`` änderbar). Umgebungsvariablen, auch aus einer ``.env``,
überschreiben die Dateipfade und den Port, damit Deployments ohne
angepasste INI auskommen.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .builder import DEFAULT_MAX_GROUP_GAP, DEFAULT_MIN_GROUP_GAP, GroupHeuristic

logger = logging.getLogger(__name__)

CONFIG_MAIN_PATH = Path(__file__).resolve().parents[1] / "config.ini"


@dataclass
class SysCodeSettings:
    code_file: Path = Path("data/syscode.csv")
    subset_file: Path = Path("data/syssubset.csv")
    min_group_gap: int = DEFAULT_MIN_GROUP_GAP
    max_group_gap: int = DEFAULT_MAX_GROUP_GAP
    console_level: str = "INFO"
    file_enabled: bool = False
    file_path: str = ""
    file_max_bytes: int = 1048576
    file_backup_count: int = 3
    port: int = 8000
    search_limit: int = 20

    @property
    def heuristic(self) -> GroupHeuristic:
        return GroupHeuristic(min_gap=self.min_group_gap, max_gap=self.max_group_gap)


def config_path() -> Path:
    override = os.getenv("SYSCODES_CONFIG")
    return Path(override) if override else CONFIG_MAIN_PATH


def load_base_config(path: Optional[Path] = None) -> configparser.ConfigParser:
    """Lädt die statische Grundkonfiguration; fehlt die Datei, bleibt sie leer."""
    cfg = configparser.ConfigParser()
    cfg.read(path or config_path(), encoding="utf-8-sig")
    return cfg


def _get_int_option(cfg: configparser.ConfigParser, section: str, option: str, default: int) -> int:
    """Liest einen Integer (auch ``0x``-Hex) und fällt bei ungültigem Wert zurück."""
    raw_value = cfg.get(section, option, fallback="").strip()
    if not raw_value:
        return default
    try:
        return int(raw_value, 0)
    except ValueError:
        logger.warning("Ignoriere ungueltigen Wert fuer %s.%s: %s", section, option, raw_value)
        return default


def _resolve_path(raw: str, base_dir: Path) -> Path:
    path = Path(raw).expanduser()
    return path if path.is_absolute() else base_dir / path


def load_settings(path: Optional[Path] = None) -> SysCodeSettings:
    """Combine ``config.ini`` and environment variables into settings.

    Relative table paths are resolved against the directory of the INI file.
    """
    load_dotenv()
    path = path or config_path()
    cfg = load_base_config(path)
    defaults = SysCodeSettings()
    base_dir = path.resolve().parent

    code_file = os.getenv("SYSCODES_CODE_FILE") or cfg.get(
        "SYSCODES", "code_file", fallback=str(defaults.code_file)
    )
    subset_file = os.getenv("SYSCODES_SUBSET_FILE") or cfg.get(
        "SYSCODES", "subset_file", fallback=str(defaults.subset_file)
    )

    try:
        file_enabled = cfg.getint("LOGGING", "file_enabled", fallback=0) == 1
    except ValueError:
        file_enabled = False

    port = _get_int_option(cfg, "SERVER", "port", defaults.port)
    env_port = os.getenv("PORT")
    if env_port and env_port.strip().isdigit():
        port = int(env_port)

    return SysCodeSettings(
        code_file=_resolve_path(code_file, base_dir),
        subset_file=_resolve_path(subset_file, base_dir),
        min_group_gap=_get_int_option(cfg, "GROUPING", "min_gap", defaults.min_group_gap),
        max_group_gap=_get_int_option(cfg, "GROUPING", "max_gap", defaults.max_group_gap),
        console_level=cfg.get("LOGGING", "console_level", fallback=defaults.console_level).upper(),
        file_enabled=file_enabled,
        file_path=cfg.get("LOGGING", "file_path", fallback=defaults.file_path),
        file_max_bytes=max(0, _get_int_option(cfg, "LOGGING", "file_max_bytes", defaults.file_max_bytes)),
        file_backup_count=max(0, _get_int_option(cfg, "LOGGING", "file_backup_count", defaults.file_backup_count)),
        port=port,
        search_limit=max(1, _get_int_option(cfg, "SERVER", "search_limit", defaults.search_limit)),
    )
