from pathlib import Path

import pytest

from svg_hover_preview.config import AppConfig, get_config_path


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


def test_load_defaults_when_missing(config_home: Path) -> None:
    assert not get_config_path().exists()
    assert AppConfig.load() == AppConfig()


def test_save_and_load_round_trip(config_home: Path) -> None:
    cfg = AppConfig(hover_timeout_ms=2500, file_suffix=".svgz", resolve_images=False)
    cfg.save()
    assert get_config_path().is_relative_to(config_home)
    assert AppConfig.load() == cfg


def test_load_ignores_unknown_keys_and_bad_json(config_home: Path) -> None:
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    path.write_text('{"debounce_ms": 10, "unknown": 1}', encoding="utf-8")
    cfg = AppConfig.load()
    assert cfg.debounce_ms == 10
    assert not hasattr(cfg, "unknown")

    path.write_text("{not json", encoding="utf-8")
    assert AppConfig.load() == AppConfig()

    path.write_text("[1, 2]", encoding="utf-8")
    assert AppConfig.load() == AppConfig()
