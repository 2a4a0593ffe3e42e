# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Keybinder: find per-game settings files and rewrite keybinds in place."""

__version__ = "0.1.0"
