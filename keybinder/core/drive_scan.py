# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Filesystem search for game settings files.

The walk is depth-first in directory-listing order and stops at the first
file whose name contains the search term.  It uses an explicit stack so
arbitrarily deep trees cannot exhaust the interpreter's recursion limit,
and it polls an optional ``should_cancel`` callable so a long full-drive
scan can be aborted from the outside.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Iterable

import psutil

log = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]

_DIR = "dir"
_FILE = "file"


def default_roots() -> list[str]:
    """Return the filesystem roots to scan on this machine.

    On Windows every mounted volume reported by psutil, in drive-letter
    order.  Elsewhere the single root ``/``.
    """
    if sys.platform != "win32":
        return ["/"]
    roots: list[str] = []
    try:
        for part in psutil.disk_partitions(all=False):
            if part.mountpoint and part.mountpoint not in roots:
                roots.append(part.mountpoint)
    except Exception:
        log.debug("psutil.disk_partitions failed", exc_info=True)
    return sorted(roots) or ["C:\\"]


def find_file(
    root: str | Path,
    name_substring: str,
    should_cancel: CancelCheck | None = None,
) -> Path | None:
    """Return the first file under *root* whose name contains *name_substring*.

    The match is a case-sensitive substring test on the file name.
    Directories that cannot be listed are skipped.  Directory symlinks are
    not followed.  Returns ``None`` when nothing matches or the scan is
    cancelled.
    """
    if not name_substring:
        return None

    # Children are pushed in reverse so they pop in listing order.
    stack: list[tuple[str, str | None]] = [(os.fspath(root), _DIR)]
    while stack:
        current, kind = stack.pop()
        if kind == _FILE:
            if name_substring in os.path.basename(current):
                return Path(current)
            continue
        if kind != _DIR:
            continue

        if should_cancel is not None and should_cancel():
            log.info("Scan of %s cancelled", root)
            return None

        try:
            with os.scandir(current) as it:
                children = [(entry.path, _entry_kind(entry)) for entry in it]
        except OSError as exc:
            log.debug("Skipping unreadable directory %s: %s", current, exc)
            continue

        stack.extend(reversed(children))

    return None


def find_in_roots(
    roots: Iterable[str | Path],
    name_substring: str,
    should_cancel: CancelCheck | None = None,
) -> Path | None:
    """Scan *roots* in order, stopping at the first root that yields a match."""
    for root in roots:
        if should_cancel is not None and should_cancel():
            return None
        log.debug("Scanning %s for %r", root, name_substring)
        found = find_file(root, name_substring, should_cancel)
        if found is not None:
            log.info("Found %r at %s", name_substring, found)
            return found
    return None


def _entry_kind(entry: os.DirEntry) -> str | None:
    """Classify *entry* as a directory to descend into, a file, or neither."""
    try:
        if entry.is_dir(follow_symlinks=False):
            return _DIR
        if entry.is_file():
            return _FILE
    except OSError:
        pass
    return None
