# Copyright (C) 2025-2026 Keybinder Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Rewrite a single keybind value inside a game's settings file.

Settings files are treated as opaque text.  The value for a keybind is
located by the literal token from the game's config-token table and is
taken to run from the end of that token up to the end of its line or the
next ``,`` or ``)`` (UE4-style inline structs keep their siblings)::

    jump_key=CTRL\\n   --(jump -> "jump_key=", value "SPACE")-->   jump_key=SPACE\\n

Everything outside that span is preserved byte-for-byte, including line
endings and undecodable bytes.  The file is written via temp-file-and-rename
so the game never sees a half-written config.
"""

from __future__ import annotations

import enum
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from keybinder.core.resolver import SettingsPathResolver
from keybinder.core.translations import TableKind, load_table

log = logging.getLogger(__name__)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_VALUE_TERMINATORS = ("\r", "\n", ",", ")")


class PatchStatus(enum.Enum):
    OK = "ok"
    SETTINGS_FILE_NOT_FOUND = "settings_file_not_found"
    UNKNOWN_KEYBIND = "unknown_keybind"
    TOKEN_NOT_FOUND = "token_not_found"
    WRITE_FAILURE = "write_failure"


@dataclass
class PatchResult:
    ok: bool
    status: PatchStatus
    message: str
    path: Path | None = None


def splice_value(text: str, token: str, new_value: str) -> str | None:
    """Return *text* with the value after the first *token* replaced.

    The old value ends at the first of ``\\r``, ``\\n``, ``,`` or ``)``
    after the token, or at the end of *text*.
    Returns ``None`` if *token* does not occur.
    """
    start = text.find(token)
    if start == -1:
        return None
    value_start = start + len(token)
    value_end = len(text)
    for ending in _VALUE_TERMINATORS:
        idx = text.find(ending, value_start)
        if idx != -1 and idx < value_end:
            value_end = idx
    return text[:value_start] + new_value + text[value_end:]


def update_key_bind(
    game: str,
    keybind: str,
    new_value: str,
    resolver: SettingsPathResolver,
    translations_dir: str | Path,
) -> PatchResult:
    """Set *keybind* to *new_value* in *game*'s settings file.

    No file is touched unless the settings file is found, the keybind has a
    translation and its token occurs in the file.
    """
    path = resolver.resolve(game)
    if path is None:
        log.error("Settings file not found for game %r", game)
        return PatchResult(
            False, PatchStatus.SETTINGS_FILE_NOT_FOUND,
            f"Settings file not found for {game}",
        )

    token = load_table(game, TableKind.CONFIG_TOKEN, translations_dir).get(keybind)
    if not token:
        log.error("No config token for keybind %r in %r", keybind, game)
        return PatchResult(
            False, PatchStatus.UNKNOWN_KEYBIND,
            f"Unknown keybind {keybind} for {game}", path,
        )

    try:
        text = _read_text(path)
    except OSError as exc:
        log.error("Cannot read settings file %s: %s", path, exc)
        return PatchResult(
            False, PatchStatus.SETTINGS_FILE_NOT_FOUND,
            f"Settings file for {game} could not be read: {path}", path,
        )

    patched = splice_value(text, token, new_value)
    if patched is None:
        log.error("Token %r not found in %s", token, path)
        return PatchResult(
            False, PatchStatus.TOKEN_NOT_FOUND,
            f"{keybind} is not present in {path.name}", path,
        )

    if patched != text:
        try:
            _write_text_atomic(path, patched)
        except OSError as exc:
            log.error("Failed to write %s: %s", path, exc)
            return PatchResult(
                False, PatchStatus.WRITE_FAILURE,
                f"Could not write {path}: {exc}", path,
            )

    log.info("Updated %s to %s in %s", keybind, new_value, game)
    return PatchResult(
        True, PatchStatus.OK,
        f"Keybind for {keybind} updated to {new_value}", path,
    )


def _read_text(path: Path) -> str:
    with open(path, "r", encoding=_ENCODING, errors=_ERRORS, newline="") as fh:
        return fh.read()


def _write_text_atomic(path: Path, text: str) -> None:
    # Replace the symlink's target, not the link itself.
    target = path.resolve()
    fd, tmp = tempfile.mkstemp(
        suffix=target.suffix, dir=str(target.parent), prefix=".tmp_keybinder_"
    )
    try:
        with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as fh:
            fh.write(text)
        # mkstemp creates 0600; keep the original file's permissions.
        shutil.copymode(target, tmp)
        Path(tmp).replace(target)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
