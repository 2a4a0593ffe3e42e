# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""In-process entry points for the presentation layer.

A front-end creates one :class:`KeybindService` and calls its methods from
its event handlers.  Every call is synchronous and runs to completion.
"""

from __future__ import annotations

import logging
import sys

from keybinder.core.config import KNOWN_GAMES, Config, config_dir
from keybinder.core.drive_scan import CancelCheck
from keybinder.core.patcher import PatchResult, update_key_bind
from keybinder.core.path_cache import PathCache
from keybinder.core.resolver import SettingsPathResolver
from keybinder.core.translations import TableKind, load_table

log = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(cfg: Config) -> None:
    """Configure Python logging based on the user's debug settings."""
    if cfg.debug_logging:
        level = getattr(logging, cfg.debug_log_level, logging.WARNING)
        log_dir = config_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=level,
            format=_LOG_FORMAT,
            handlers=[
                logging.FileHandler(str(log_dir / "keybinder_debug.log"), encoding="utf-8"),
                logging.StreamHandler(sys.stderr),
            ],
            force=True,
        )
    else:
        logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, force=True)


class KeybindService:
    """Settings-path lookup and keybind editing for the supported games."""

    def __init__(self, config: Config | None = None, should_cancel: CancelCheck | None = None):
        self.config = config if config is not None else Config.load()
        self.resolver = SettingsPathResolver(
            PathCache(self.config.resolved_path_cache_file()),
            roots=self.config.drive_roots or None,
            should_cancel=should_cancel,
        )

    def supported_games(self) -> list[str]:
        return [g.id for g in KNOWN_GAMES]

    def get_settings_path(self, game: str) -> str | None:
        path = self.resolver.resolve(game)
        return str(path) if path is not None else None

    def update_settings_path(self, game: str) -> str | None:
        """Force a rescan for *game*, ignoring any cached path."""
        path = self.resolver.refresh(game)
        return str(path) if path is not None else None

    def update_key_bind_result(self, game: str, keybind: str, new_value: str) -> PatchResult:
        return update_key_bind(
            game, keybind, new_value,
            self.resolver, self.config.resolved_translations_dir(),
        )

    def update_key_bind(self, game: str, keybind: str, new_value: str) -> str:
        """Apply the keybind change and return a message for the user."""
        return self.update_key_bind_result(game, keybind, new_value).message

    def key_labels(self, game: str) -> dict[str, str]:
        """Return the display labels for *game*'s keybinds."""
        return load_table(game, TableKind.KEY_NAME, self.config.resolved_translations_dir())
