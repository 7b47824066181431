"""Конфігураційні моделі застосунку (бюджети viewer-а, тема, логування).

Шлях: ``app/settings.py``

Використовує pydantic-settings для ENV (`JSONSCOPE_*`) та YAML-файл для теми
підсвічування. Базові дефолти тягнемо з `config.config` як єдиного джерела правди.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_VIEW_INDENT,
    DEFAULT_VIEW_MAX_ARRAY_SIZE,
    DEFAULT_VIEW_MAX_STRING_LENGTH,
    ENV_FILE_OVERRIDE_VAR,
    ENV_PREFIX,
    JSON_CATEGORY_STYLES,
    MARKER_STYLES,
    PROJECT_ROOT,
)

logger = logging.getLogger("app.settings")
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def select_env_file(project_root: Path = PROJECT_ROOT) -> Path:
    """Повертає env-файл: `JSONSCOPE_ENV_FILE` (якщо задано) або `.env` у корені."""

    override = os.getenv(ENV_FILE_OVERRIDE_VAR)
    if override:
        candidate = Path(override).expanduser()
        return candidate if candidate.is_absolute() else project_root / candidate
    return project_root / ".env"


_ENV_FILE = select_env_file()
load_dotenv(_ENV_FILE)

_NONE_VALUES = {"", "none", "null", "off", "unlimited"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",  # ігноруємо невідомі змінні замість ValidationError
    )

    indent: int | None = DEFAULT_VIEW_INDENT
    compact: bool = True
    max_string_length: int | None = DEFAULT_VIEW_MAX_STRING_LENGTH
    max_array_size: int | None = DEFAULT_VIEW_MAX_ARRAY_SIZE
    theme_path: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    # `JSONSCOPE_MAX_ARRAY_SIZE=unlimited` -> None (без обмеження)
    @field_validator("indent", "max_string_length", "max_array_size", mode="before")
    @classmethod
    def _coerce_optional_int(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str) and v.strip().lower() in _NONE_VALUES:
            return None
        return v

    @field_validator("max_string_length", "max_array_size")
    @classmethod
    def _validate_budget(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("бюджет має бути >= 1 або не заданий (unlimited)")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return DEFAULT_LOG_LEVEL
        value = str(v).strip().upper()
        return value or DEFAULT_LOG_LEVEL


class ViewerTheme(BaseModel):
    """Rich-стилі для категорій сегментів та діагностичних маркерів."""

    styles: dict[str, str] = Field(default_factory=lambda: dict(JSON_CATEGORY_STYLES))
    markers: dict[str, str] = Field(default_factory=lambda: dict(MARKER_STYLES))

    def style_for(self, category: str) -> str:
        """Стиль категорії; невідома категорія використовується як стиль напряму."""

        if category in self.markers:
            return self.markers[category]
        if category in self.styles:
            return self.styles[category]
        return JSON_CATEGORY_STYLES.get(category, MARKER_STYLES.get(category, category))


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as fh:
        loaded = yaml.safe_load(fh)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(
            f"Файл теми {path} має бути мапою, а не {type(loaded)!r}"
        )
    return loaded


def load_theme(path: str | Path | None = None) -> ViewerTheme:
    """Завантажує тему з YAML поверх дефолтів.

    Формат:
        styles:  {key: "bold blue", number: "magenta"}
        markers: {truncated: "red"}

    Відсутній файл -> дефолтна тема (з warning); некоректний YAML -> ValueError.
    """

    theme = ViewerTheme()
    if path is None:
        return theme
    theme_path = Path(path)
    if not theme_path.exists():
        logger.warning(
            "Файл теми %s не знайдено, використовуємо значення за замовчуванням",
            theme_path,
        )
        return theme
    try:
        payload = _read_yaml(theme_path)
    except yaml.YAMLError as exc:
        logger.error("Не вдалося розпарсити %s: %s", theme_path, exc)
        raise ValueError(f"Некоректний YAML у {theme_path}") from exc

    override = ViewerTheme.model_validate(
        {
            "styles": payload.get("styles") or {},
            "markers": payload.get("markers") or {},
        }
    )
    return ViewerTheme(
        styles={**theme.styles, **override.styles},
        markers={**theme.markers, **override.markers},
    )

