# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Persistent application configuration for Keybinder.

Settings are stored as a JSON file in the OS-appropriate config directory
(``%LOCALAPPDATA%/Keybinder`` on Windows, ``~/.config/Keybinder`` on Linux).
The module also holds the built-in table of supported games and the
filename fragment used to find each game's settings file on disk.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from PySide6.QtCore import QStandardPaths


# -- Defaults --------------------------------------------------------------

_APP_DIR_NAME = "Keybinder"
_CONFIG_FILE  = "settings.json"
_PATH_CACHE_FILE = "paths.txt"

_PACKAGE_DIR = Path(__file__).resolve().parent.parent
BUNDLED_DATA_DIR = _PACKAGE_DIR / "data"


def config_dir() -> Path:
    """Return (and create) the per-user config directory."""
    base = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.GenericConfigLocation,
    )
    path = Path(base) / _APP_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


# -- Known games -----------------------------------------------------------


@dataclass(frozen=True)
class GameEntry:
    """A supported game and the filename fragment of its settings file."""
    id: str
    search_term: str


KNOWN_GAMES: tuple[GameEntry, ...] = (
    GameEntry("Apex Legends", "settings.cfg"),
    GameEntry("PUBG",         "GameUserSettings.ini"),
    GameEntry("CS:GO",        "config.cfg"),
)

SEARCH_TERMS: Mapping[str, str] = MappingProxyType(
    {g.id: g.search_term for g in KNOWN_GAMES}
)


# -- Config ----------------------------------------------------------------


@dataclass
class Config:
    """User-editable settings.  Empty values mean "use the default"."""

    # Data locations
    translations_dir: str = ""           # root holding configtranslations/ and keytranslations/
    path_cache_file: str = ""            # game=path cache

    # Drive scan
    drive_roots: list[str] = field(default_factory=list)

    # Debug
    debug_logging: bool = False
    debug_log_level: str = "WARNING"     # DEBUG / INFO / WARNING / ERROR

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load from disk, returning defaults if the file is missing or bad.

        Unknown keys in the JSON (left over from older versions) are
        silently ignored so that adding or removing Config fields never
        causes a crash.
        """
        path = Path(path) if path is not None else config_dir() / _CONFIG_FILE
        if not path.exists():
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            known = {f.name for f in fields(cls)}
            raw = {k: v for k, v in raw.items() if k in known}
            return cls(**raw)
        except Exception:
            return cls()

    def save(self, path: str | Path | None = None) -> None:
        """Write current settings to disk."""
        path = Path(path) if path is not None else config_dir() / _CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolved_translations_dir(self) -> Path:
        if self.translations_dir:
            return Path(self.translations_dir)
        return BUNDLED_DATA_DIR

    def resolved_path_cache_file(self) -> Path:
        if self.path_cache_file:
            return Path(self.path_cache_file)
        return config_dir() / _PATH_CACHE_FILE
