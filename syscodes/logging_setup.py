"""Logging-Konfiguration für CLI und Server."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import SysCodeSettings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class SafeEncodingStreamHandler(logging.StreamHandler):
    def emit(self, record):
        """Schreibt Logzeilen robust unter Erhalt nicht-ASCII-Zeichen."""
        try:
            msg = self.format(record)
            stream = self.stream
            stream.write(msg.encode("utf-8", errors="replace").decode("utf-8", errors="ignore") + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


class SafeRotatingFileHandler(RotatingFileHandler):
    """Rotating handler that tolerates Windows file locks (e.g. OneDrive/AV)."""

    def rotate(self, source: str, dest: str) -> None:
        try:
            super().rotate(source, dest)
            return
        except PermissionError as exc:
            if getattr(exc, "winerror", None) != 32:
                raise
        # copy and truncate instead of renaming the locked file
        try:
            if os.path.exists(source):
                shutil.copy2(source, dest)
            with open(source, "w", encoding=self.encoding or "utf-8") as fh:
                fh.truncate(0)
        except OSError:
            return


def configure_logging(
    settings: SysCodeSettings,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
) -> None:
    """Ersetzt die Handler des Root-Loggers gemäss ``settings``.

    ``level`` und ``log_file`` überschreiben die Werte aus der Konfiguration,
    etwa für ``-v`` und ``--log-file`` der CLI.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if level is None:
        level = logging.getLevelName(settings.console_level)
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = SafeEncodingStreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    root_logger.addHandler(stream_handler)
    root_logger.setLevel(level)

    file_path = log_file or (Path(settings.file_path) if settings.file_enabled and settings.file_path else None)
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = SafeRotatingFileHandler(
            file_path,
            maxBytes=settings.file_max_bytes,
            backupCount=settings.file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)
