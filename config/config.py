"""Центральне джерело конфігурації jsonscope.

У модулі зібрані константи серіалізації/сегментації, маркери діагностики
та дефолтні стилі Rich для JSON viewer-а.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

__all__ = [
    "ENV_PREFIX",
    "ENV_FILE_OVERRIDE_VAR",
    "PROJECT_ROOT",
    "COMPACT_WIDTH_THRESHOLD",
    "STRING_TRIM_RESERVE",
    "CIRCULAR_ROOT_MARKER",
    "CIRCULAR_PARENT_MARKER",
    "MORE_CHARS_MARKER",
    "MORE_ITEMS_MARKER",
    "UNLIMITED_DEPTH",
    "JSON_CATEGORY_STYLES",
    "MARKER_STYLES",
    "DEFAULT_VIEW_INDENT",
    "DEFAULT_VIEW_MAX_STRING_LENGTH",
    "DEFAULT_VIEW_MAX_ARRAY_SIZE",
    "DEFAULT_LOG_LEVEL",
    "FOLD_ELLIPSIS",
]

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent

# ── ENV ───────────────────────────────────────────────────────────────────

ENV_PREFIX: Final[str] = "JSONSCOPE_"
# Явний шлях до env-файлу (інакше `.env` у корені репо).
ENV_FILE_OVERRIDE_VAR: Final[str] = "JSONSCOPE_ENV_FILE"

# ── Serialization ─────────────────────────────────────────────────────────

# Сумарна довжина дочірніх рядків, нижче якої контейнер лишається в один рядок.
COMPACT_WIDTH_THRESHOLD: Final[int] = 60
# Скільки символів бюджету рядка "з'їдає" маркер `…N more chars…`.
STRING_TRIM_RESERVE: Final[int] = 12

CIRCULAR_ROOT_MARKER: Final[str] = "<<circular ref to the root object>>"
CIRCULAR_PARENT_MARKER: Final[str] = "<<circular ref to parent level {level}>>"
MORE_CHARS_MARKER: Final[str] = " …{count} more chars…"
MORE_ITEMS_MARKER: Final[str] = "…{count} more items…"

# ── Traversal ─────────────────────────────────────────────────────────────

UNLIMITED_DEPTH: Final[int] = -1

# ── Viewer (Rich) ─────────────────────────────────────────────────────────

# Категорія сегмента -> Rich style. Порожня категорія ("") не стилізується.
JSON_CATEGORY_STYLES: Final[dict[str, str]] = {
    "key": "blue",
    "string": "",
    "number": "magenta",
    "true": "green",
    "false": "bright_black",
    "null": "cyan",
    "punctuation": "bold",
}

MARKER_STYLES: Final[dict[str, str]] = {
    "truncated": "bold red",
    "circular": "bold yellow",
}

DEFAULT_VIEW_INDENT: Final[int] = 2
DEFAULT_VIEW_MAX_STRING_LENGTH: Final[int] = 500
DEFAULT_VIEW_MAX_ARRAY_SIZE: Final[int] = 100
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

FOLD_ELLIPSIS: Final[str] = "..."
