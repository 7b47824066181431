"""Тести конфігурації (app.settings): ENV-override бюджетів і YAML-тема."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.settings import Settings, ViewerTheme, load_theme, select_env_file
from config.config import DEFAULT_VIEW_MAX_ARRAY_SIZE, JSON_CATEGORY_STYLES


def test_defaults_come_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JSONSCOPE_MAX_ARRAY_SIZE", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.max_array_size == DEFAULT_VIEW_MAX_ARRAY_SIZE
    assert cfg.log_level == "INFO"


def test_env_overrides_and_unlimited(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSONSCOPE_MAX_STRING_LENGTH", "64")
    monkeypatch.setenv("JSONSCOPE_MAX_ARRAY_SIZE", "unlimited")
    monkeypatch.setenv("JSONSCOPE_INDENT", "none")
    monkeypatch.setenv("JSONSCOPE_LOG_LEVEL", " debug ")

    cfg = Settings(_env_file=None)

    assert cfg.max_string_length == 64
    assert cfg.max_array_size is None
    assert cfg.indent is None
    assert cfg.log_level == "DEBUG"


def test_invalid_budget_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSONSCOPE_MAX_ARRAY_SIZE", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_select_env_file_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("JSONSCOPE_ENV_FILE", ".env.local")
    assert select_env_file(tmp_path) == tmp_path / ".env.local"

    monkeypatch.delenv("JSONSCOPE_ENV_FILE")
    assert select_env_file(tmp_path) == tmp_path / ".env"


def test_load_theme_merges_over_defaults(tmp_path: Path) -> None:
    theme_file = tmp_path / "theme.yaml"
    theme_file.write_text(
        "styles:\n  key: bold green\nmarkers:\n  circular: red\n", encoding="utf-8"
    )

    theme = load_theme(theme_file)

    assert theme.style_for("key") == "bold green"
    assert theme.style_for("number") == JSON_CATEGORY_STYLES["number"]
    assert theme.style_for("circular") == "red"
    assert theme.style_for("truncated") == "bold red"
    # невідома категорія = стиль як є
    assert theme.style_for("underline") == "underline"


def test_load_theme_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_theme(tmp_path / "nope.yaml") == ViewerTheme()
    assert load_theme(None) == ViewerTheme()


def test_load_theme_rejects_non_mapping(tmp_path: Path) -> None:
    theme_file = tmp_path / "theme.yaml"
    theme_file.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_theme(theme_file)


def test_load_theme_rejects_broken_yaml(tmp_path: Path) -> None:
    theme_file = tmp_path / "theme.yaml"
    theme_file.write_text("styles: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Некоректний YAML"):
        load_theme(theme_file)
