"""Дрібні текстові утиліти (відступи, порожні рядки, пошук, безпечні імена)."""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
import re
from typing import Literal

EmptyLineLocation = Literal["head", "tail", "middle"]

_INVALID_FS_CHARS = re.compile(r'[<>:"/\\|?*]')
_MAX_FS_NAME = 255


def trim_prefix(text: str, prefix: str) -> str:
    return text[len(prefix) :] if prefix and text.startswith(prefix) else text


def trim_suffix(text: str, suffix: str) -> str:
    return text[: -len(suffix)] if suffix and text.endswith(suffix) else text


def trim_empty_lines(text: str, *locations: EmptyLineLocation) -> str:
    """Прибирає порожні (або з пробілів) рядки у вказаних місцях.

    `head` — на початку, `tail` — в кінці, `middle` — усі порожні рядки взагалі.
    """

    lines = text.split("\n")
    if "head" in locations:
        while lines and not lines[0].strip():
            lines.pop(0)
    if "tail" in locations:
        while lines and not lines[-1].strip():
            lines.pop()
    if "middle" in locations:
        lines = [line for line in lines if line.strip()]
    return "\n".join(lines)


def get_indentation(text: str) -> int:
    """Кількість пробілів на початку рядка (таби не рахуються)."""

    return len(text) - len(text.lstrip(" "))


def indent_text(text: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in text.split("\n"))


def unindent_text(text: str, spaces: int) -> str:
    """Знімає до `spaces` пробілів з кожного рядка (не більше, ніж є)."""

    return "\n".join(
        line[min(get_indentation(line), spaces) :] for line in text.split("\n")
    )


def ensure_indentation(text: str, spaces: int) -> str:
    """Вирівнює блок так, щоб перший рядок мав рівно `spaces` пробілів."""

    current = get_indentation(text)
    if current >= spaces:
        return unindent_text(text, current - spaces)
    return indent_text(text, spaces - current)


def find_indexes(text: str, sub: str) -> list[int]:
    """Позиції всіх неперетинних входжень `sub` у `text`."""

    if not sub:
        return []
    indexes: list[int] = []
    start = 0
    while True:
        index = text.find(sub, start)
        if index < 0:
            return indexes
        indexes.append(index)
        start = index + len(sub)


def to_file_system_name(name: str) -> str:
    """Робить з довільного рядка безпечне ім'я файлу (<= 255 символів)."""

    cleaned = _INVALID_FS_CHARS.sub("_", name.strip())
    return cleaned[:_MAX_FS_NAME]


def simple_hash(text: str) -> int:
    """32-бітний знаковий хеш рядка (`h = h*31 + code`), стабільний між запусками."""

    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


__all__ = (
    "EmptyLineLocation",
    "ensure_indentation",
    "find_indexes",
    "get_indentation",
    "indent_text",
    "simple_hash",
    "to_file_system_name",
    "trim_empty_lines",
    "trim_prefix",
    "trim_suffix",
    "unindent_text",
)
