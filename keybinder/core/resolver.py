# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Resolve a game id to the path of its settings file.

Cached paths are trusted as-is; only a cache miss (or an explicit
:meth:`SettingsPathResolver.refresh`) triggers a drive scan.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from keybinder.core.config import SEARCH_TERMS
from keybinder.core.drive_scan import CancelCheck, default_roots, find_in_roots
from keybinder.core.path_cache import PathCache

log = logging.getLogger(__name__)


class SettingsPathResolver:
    def __init__(
        self,
        cache: PathCache,
        roots: Iterable[str | Path] | None = None,
        search_terms: Mapping[str, str] = SEARCH_TERMS,
        should_cancel: CancelCheck | None = None,
    ):
        self.cache = cache
        self.roots = list(roots) if roots is not None else None
        self.search_terms = search_terms
        self.should_cancel = should_cancel

    def resolve(self, game: str) -> Path | None:
        """Return the cached path for *game*, scanning only on a miss."""
        cached = self.cache.lookup(game)
        if cached:
            log.debug("Cache hit for %r: %s", game, cached)
            return Path(cached)
        return self.refresh(game)

    def refresh(self, game: str) -> Path | None:
        """Scan the drives for *game*'s settings file and cache the result.

        Returns ``None`` for games without a known search term or when no
        root contains a match.  A successful scan always appends a new
        cache line, even if the game was already cached.
        """
        term = self.search_terms.get(game)
        if not term:
            log.warning("No search term known for game %r", game)
            return None

        roots = self.roots if self.roots is not None else default_roots()
        found = find_in_roots(roots, term, self.should_cancel)
        if found is None:
            log.info("No %r found for %r in %s", term, game, roots)
            return None

        try:
            self.cache.record(game, found)
        except OSError:
            log.warning("Could not cache path for %r", game, exc_info=True)
        return found
