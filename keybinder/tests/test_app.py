"""Tests for the presentation-facing KeybindService."""

import logging
from pathlib import Path

import pytest

from keybinder import app as app_mod
from keybinder.app import KeybindService, configure_logging
from keybinder.core.config import Config


def _service(tmp_path: Path, **overrides) -> KeybindService:
    drive = tmp_path / "drive"
    drive.mkdir(exist_ok=True)
    cfg = Config(
        path_cache_file=str(tmp_path / "paths.txt"),
        drive_roots=[str(drive)],
        **overrides,
    )
    return KeybindService(cfg)


def _install_apex(tmp_path: Path, text: str = "jump_key=CTRL\ncrouch_key=C\n") -> Path:
    settings = tmp_path / "drive" / "Respawn" / "Apex" / "local" / "settings.cfg"
    settings.parent.mkdir(parents=True)
    settings.write_text(text, encoding="utf-8", newline="")
    return settings


class TestKeybindService:
    def test_supported_games(self, tmp_path: Path) -> None:
        assert _service(tmp_path).supported_games() == ["Apex Legends", "PUBG", "CS:GO"]

    def test_get_settings_path_scans_then_caches(self, tmp_path: Path) -> None:
        service = _service(tmp_path)
        settings = _install_apex(tmp_path)

        assert service.get_settings_path("Apex Legends") == str(settings)
        settings.unlink()
        # Second lookup comes from the cache, not the (now empty) drive.
        assert service.get_settings_path("Apex Legends") == str(settings)

    def test_get_settings_path_unknown(self, tmp_path: Path) -> None:
        assert _service(tmp_path).get_settings_path("PUBG") is None

    def test_update_settings_path_rescans(self, tmp_path: Path) -> None:
        service = _service(tmp_path)
        (tmp_path / "paths.txt").write_text("Apex Legends=/gone/settings.cfg\n", encoding="utf-8")
        settings = _install_apex(tmp_path)

        assert service.update_settings_path("Apex Legends") == str(settings)
        assert service.get_settings_path("Apex Legends") == str(settings)

    def test_update_settings_path_no_match(self, tmp_path: Path) -> None:
        assert _service(tmp_path).update_settings_path("Apex Legends") is None

    def test_update_key_bind_with_bundled_tables(self, tmp_path: Path) -> None:
        service = _service(tmp_path)
        settings = _install_apex(tmp_path)

        message = service.update_key_bind("Apex Legends", "jump", "SPACE")

        assert message == "Keybind for jump updated to SPACE"
        assert settings.read_text(encoding="utf-8") == "jump_key=SPACE\ncrouch_key=C\n"

    def test_update_key_bind_failure_message(self, tmp_path: Path) -> None:
        service = _service(tmp_path)
        message = service.update_key_bind("Apex Legends", "jump", "SPACE")
        assert message == "Settings file not found for Apex Legends"

    def test_update_key_bind_result(self, tmp_path: Path) -> None:
        service = _service(tmp_path)
        settings = _install_apex(tmp_path)
        before = settings.read_bytes()

        result = service.update_key_bind_result("Apex Legends", "dance", "F")

        assert not result.ok
        assert settings.read_bytes() == before

    def test_custom_translations_dir(self, tmp_path: Path) -> None:
        tables = tmp_path / "tables" / "configtranslations"
        tables.mkdir(parents=True)
        (tables / "Apex Legends.txt").write_text("dance:emote_key=\n", encoding="utf-8")
        service = _service(tmp_path, translations_dir=str(tmp_path / "tables"))
        settings = _install_apex(tmp_path, "emote_key=G\n")

        assert service.update_key_bind_result("Apex Legends", "dance", "H").ok
        assert settings.read_text(encoding="utf-8") == "emote_key=H\n"

    def test_key_labels(self, tmp_path: Path) -> None:
        labels = _service(tmp_path).key_labels("CS:GO")
        assert labels["crouch"] == "Duck"

    def test_key_labels_unknown_game(self, tmp_path: Path) -> None:
        assert _service(tmp_path).key_labels("Tetris") == {}

    def test_cancel_is_passed_to_scan(self, tmp_path: Path) -> None:
        _install_apex(tmp_path)
        cfg = Config(
            path_cache_file=str(tmp_path / "paths.txt"),
            drive_roots=[str(tmp_path / "drive")],
        )
        service = KeybindService(cfg, should_cancel=lambda: True)
        assert service.get_settings_path("Apex Legends") is None


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_level = root.level
    yield
    # Drop the plain handlers basicConfig installed; pytest's own handlers
    # are subclasses and are managed by pytest.
    for handler in root.handlers[:]:
        if type(handler) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


class TestConfigureLogging:
    def test_debug_logging_writes_file(self, tmp_path: Path, monkeypatch, restore_logging) -> None:
        monkeypatch.setattr(app_mod, "config_dir", lambda: tmp_path)
        configure_logging(Config(debug_logging=True, debug_log_level="DEBUG"))

        logging.getLogger("keybinder.test").debug("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        log_file = tmp_path / "logs" / "keybinder_debug.log"
        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_default_is_warning(self, restore_logging) -> None:
        configure_logging(Config())
        assert logging.getLogger().level == logging.WARNING

    def test_bad_level_falls_back(self, tmp_path: Path, monkeypatch, restore_logging) -> None:
        monkeypatch.setattr(app_mod, "config_dir", lambda: tmp_path)
        configure_logging(Config(debug_logging=True, debug_log_level="CHATTY"))
        assert logging.getLogger().level == logging.WARNING
