# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Append-only cache of discovered settings-file paths.

One ``game=path`` line per record.  Entries are never rewritten or removed;
when a game appears more than once the most recently appended line wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)


class PathCache:
    """Game id -> settings path lookup backed by a flat text file."""

    def __init__(self, cache_file: str | Path):
        self.cache_file = Path(cache_file)

    def entries(self) -> dict[str, str]:
        """Return every cached game with its latest path.

        A missing or unreadable cache file reads as empty.
        """
        try:
            text = self.cache_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Cannot read path cache %s: %s", self.cache_file, exc)
            return {}

        result: dict[str, str] = {}
        for raw_line in text.splitlines():
            game, sep, path = raw_line.partition("=")
            game = game.strip()
            path = path.strip()
            if not sep or not game or not path:
                continue
            result[game] = path
        return result

    def lookup(self, game: str) -> str | None:
        return self.entries().get(game)

    def record(self, game: str, path: str | Path) -> None:
        """Append ``game=path`` to the cache file.

        Raises :class:`OSError` if the file cannot be written.
        """
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        with self.cache_file.open("a", encoding="utf-8") as fh:
            fh.write(f"{game}={path}\n")
        log.debug("Cached settings path for %r: %s", game, path)
