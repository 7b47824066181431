"""Обхід довільного графа значень (dict/list) з детекцією циклів.

Кожен вузол класифікується як:
- `leaf` — не-контейнер (None, bool, число, рядок, будь-який "opaque" об'єкт);
- `object` — контейнер, якого ще немає у стеку предків;
- `loop` — контейнер, який уже є у стеку предків (цикл), у нього не спускаємось.

Принципи:
- ідентичність (`id()`), а не рівність: однакові за вмістом dict-и — різні вузли;
- стек предків живе лише в межах одного виклику `traverse`;
- спільні (але ациклічні) підграфи відвідуються один раз на кожен шлях;
- вхідний граф не мутується.
"""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
import logging
from collections.abc import Callable, Iterator, Mapping
from enum import Enum, IntEnum
from typing import Any

from config.config import UNLIMITED_DEPTH

# Починаючи з 1e21 числа друкуються в експоненційному записі.
_EXPONENT_FROM = 1e21

logger = logging.getLogger("core.traversal")
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# ── Types ─────────────────────────────────────────────────────────────────


class NodeKind(str, Enum):
    """Класифікація вузла, яку бачить visitor."""

    LEAF = "leaf"
    OBJECT = "object"
    LOOP = "loop"


class VisitResult(IntEnum):
    """Що робити після відвідування вузла.

    Значення сумісні з "числовим" протоколом: 0 — без дітей, -1 — зупинити
    весь обхід, будь-що інше (1, None, True, ...) — далі.
    """

    CONTINUE = 1
    SKIP_CHILDREN = 0
    STOP_ALL = -1


Path = tuple[str, ...]
Visitor = Callable[[Path, Any, NodeKind], "VisitResult | int | None"]

# ── Helpers ───────────────────────────────────────────────────────────────


def is_container(value: Any) -> bool:
    """Чи є значення "референсним" типом (масив або мапа)."""

    return isinstance(value, (Mapping, list, tuple))


def iter_children(value: Any) -> Iterator[tuple[str, Any]]:
    """Ітерує (ключ, дитина): масиви — за індексом, мапи — у порядку вставки."""

    if isinstance(value, Mapping):
        for key, child in value.items():
            yield str(key), child
    else:
        for index, child in enumerate(value):
            yield str(index), child


# ── Traversal ─────────────────────────────────────────────────────────────


def traverse(value: Any, max_depth: int, visit: Visitor) -> None:
    """Рекурсивно обходить `value`, викликаючи `visit(path, value, kind)`.

    - корінь відвідується з `path == ()`;
    - `max_depth < 0` — без обмеження; інакше при `len(path) >= max_depth`
      вузол відвідується, але діти не перелічуються;
    - `visit` повертає `VisitResult` (або None == CONTINUE).

    Винятки з `visit` пробрасуються без змін (fail-fast).
    """

    _traverse(value, max_depth, visit, (), set())


def _traverse(
    value: Any,
    max_depth: int,
    visit: Visitor,
    path: Path,
    ancestors: set[int],
) -> VisitResult:
    if not is_container(value):
        return _coerce_result(visit(path, value, NodeKind.LEAF))

    if id(value) in ancestors:
        return _coerce_result(visit(path, value, NodeKind.LOOP))

    result = _coerce_result(visit(path, value, NodeKind.OBJECT))
    if result is not VisitResult.CONTINUE:
        return result

    if max_depth >= 0 and len(path) >= max_depth:
        return VisitResult.CONTINUE

    ancestors.add(id(value))
    try:
        for key, child in iter_children(value):
            child_result = _traverse(child, max_depth, visit, (*path, key), ancestors)
            if child_result is VisitResult.STOP_ALL:
                return VisitResult.STOP_ALL
    finally:
        ancestors.discard(id(value))
    return VisitResult.CONTINUE


def _coerce_result(raw: object) -> VisitResult:
    # Лише 0 та -1 щось змінюють; будь-яке інше значення (None, True, 2, ...) == CONTINUE.
    if isinstance(raw, bool) or not isinstance(raw, int):
        return VisitResult.CONTINUE
    if raw == VisitResult.SKIP_CHILDREN:
        return VisitResult.SKIP_CHILDREN
    if raw == VisitResult.STOP_ALL:
        return VisitResult.STOP_ALL
    return VisitResult.CONTINUE


# ── Consumers ─────────────────────────────────────────────────────────────


def fuzzy_find(
    value: Any,
    keyword: str,
    *,
    case_sensitive: bool = True,
) -> list[str] | None:
    """Повертає шлях до першого листа, текст якого містить `keyword`.

    Числа мають збігатися повністю (`"7"` не знайде `17`). None пропускаємо.
    Якщо нічого не знайдено — None.
    """

    needle = keyword if case_sensitive else keyword.lower()
    found: list[str] | None = None

    def _visit(path: Path, node: Any, kind: NodeKind) -> VisitResult:
        nonlocal found
        if kind is not NodeKind.LEAF or node is None:
            return VisitResult.CONTINUE
        if isinstance(node, (int, float)) and not isinstance(node, bool):
            if number_text(node) == keyword:
                found = list(path)
                return VisitResult.STOP_ALL
            return VisitResult.CONTINUE
        text = _leaf_text(node)
        haystack = text if case_sensitive else text.lower()
        if needle in haystack:
            found = list(path)
            return VisitResult.STOP_ALL
        return VisitResult.CONTINUE

    traverse(value, UNLIMITED_DEPTH, _visit)
    logger.debug("fuzzy_find keyword=%r found=%s", keyword, found)
    return found


def number_text(value: int | float) -> str:
    """Канонічний текст числа для пошуку: `3.0` -> "3", `1e21` -> "1e+21"."""

    if isinstance(value, float) and value.is_integer() and abs(value) < _EXPONENT_FROM:
        return str(int(value))
    return str(value)


def _leaf_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = (
    "NodeKind",
    "Path",
    "VisitResult",
    "Visitor",
    "fuzzy_find",
    "is_container",
    "iter_children",
    "number_text",
    "traverse",
)
