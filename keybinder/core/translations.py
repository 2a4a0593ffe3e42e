# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Per-game translation tables.

Each table is a flat text file of ``generic:literal`` lines, one file per
game and per kind::

    <base_dir>/configtranslations/Apex Legends.txt   jump:jump_key=
    <base_dir>/keytranslations/Apex Legends.txt      jump:Space Bar

Tables are read fresh on every call; nothing is cached in memory.
"""

from __future__ import annotations

import enum
import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

_DELIMITER = ":"
_UNSAFE_FILENAME_RE = re.compile(r'[<>:"/\\|?*]')


class TableKind(enum.Enum):
    """Which translation table to read; the value is its directory name."""
    CONFIG_TOKEN = "configtranslations"
    KEY_NAME = "keytranslations"


def table_filename(game: str) -> str:
    """Return the on-disk file name for *game* (``CS:GO`` -> ``CS_GO.txt``)."""
    return f"{_UNSAFE_FILENAME_RE.sub('_', game).strip()}.txt"


def table_path(game: str, kind: TableKind, base_dir: str | Path) -> Path:
    return Path(base_dir) / kind.value / table_filename(game)


def parse_table(text: str) -> dict[str, str]:
    """Parse ``key:value`` lines into a dict.

    Blank lines are ignored.  Raises :class:`ValueError` on the first line
    that has no delimiter or an empty key.
    """
    table: dict[str, str] = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        if not raw_line.strip():
            continue
        key, sep, value = raw_line.partition(_DELIMITER)
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"line {lineno}: expected 'key{_DELIMITER}value', got {raw_line!r}")
        table[key] = value.strip()
    return table


def load_table(game: str, kind: TableKind, base_dir: str | Path) -> dict[str, str]:
    """Return the *kind* translation table for *game*.

    A missing, unreadable or malformed file is logged and yields an empty
    dict, so every lookup against it is a miss.
    """
    path = table_path(game, kind, base_dir)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.error("Cannot read %s table for %r at %s: %s", kind.name, game, path, exc)
        return {}

    try:
        return parse_table(text)
    except ValueError as exc:
        log.error("Malformed %s table %s: %s", kind.name, path, exc)
        return {}
