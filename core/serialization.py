"""SSOT для безпечної (bounded) JSON-серіалізації довільних графів.

Мета: дати рендер у JSON-подібний текст, який:
- ніколи не падає на циклах, довгих рядках чи "дивних" об'єктах;
- обмежений за розміром (`max_string_length`, `max_array_size`);
- повертає лічильники того, що було обрізано/замінено маркерами.

Принципи:
- без "магії": скаляри рендеряться за правилами stdlib `json`;
- цикли детектуються за ідентичністю (стек предків у межах одного виклику);
- маркери (`<<circular ref …>>`, `…N more chars…`, `…N more items…`) — це
  діагностичний текст, а не дані; парсити їх назад не можна;
- fallback у `str(obj)` тільки коли інакше не можна.
"""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from config.config import (
    CIRCULAR_PARENT_MARKER,
    CIRCULAR_ROOT_MARKER,
    COMPACT_WIDTH_THRESHOLD,
    MORE_CHARS_MARKER,
    MORE_ITEMS_MARKER,
    STRING_TRIM_RESERVE,
)
from core.contracts import SerializeStats

logger = logging.getLogger("core.serialization")
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# ── Result ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SerializationResult:
    """Текст + лічильники одного виклику `serialize`."""

    text: str
    circular_refs: int = 0
    trimmed_strings: int = 0
    trimmed_arrays: int = 0

    @property
    def truncated(self) -> bool:
        """Чи є в тексті хоч один маркер (цикл або обрізання)."""

        return bool(self.circular_refs or self.trimmed_strings or self.trimmed_arrays)

    def stats(self) -> SerializeStats:
        return {
            "circular_refs": self.circular_refs,
            "trimmed_strings": self.trimmed_strings,
            "trimmed_arrays": self.trimmed_arrays,
        }


@dataclass(slots=True)
class _Budget:
    """Бюджет і лічильники, що живуть рівно один виклик."""

    indent: str | None
    compact: bool
    max_string_length: int | None
    max_array_size: int | None
    ancestors: list[Any] = field(default_factory=list)
    # id(obj) -> індекс у `ancestors` (перше входження).
    positions: dict[int, int] = field(default_factory=dict)
    circular_refs: int = 0
    trimmed_strings: int = 0
    trimmed_arrays: int = 0


# ── Public API ────────────────────────────────────────────────────────────


def serialize(
    value: Any,
    indent: int | str | None = None,
    compact: bool = True,
    max_string_length: int | None = None,
    max_array_size: int | None = None,
) -> SerializationResult:
    """Серіалізує граф значень у JSON-подібний текст з бюджетами.

    - `indent`: None — усе в один рядок; int — кількість пробілів; str — юніт відступу;
    - `compact`: при заданому `indent` короткі контейнери (< 60 символів
      сумарно, без переносів) лишаються в один рядок;
    - `max_string_length` / `max_array_size`: None — без обмежень.

    Ніколи не кидає винятків для циклів, довгих значень чи opaque-об'єктів.
    """

    budget = _Budget(
        indent=_indent_unit(indent),
        compact=compact,
        max_string_length=max_string_length,
        max_array_size=max_array_size,
    )
    text = _render(value, budget)
    result = SerializationResult(
        text=text,
        circular_refs=budget.circular_refs,
        trimmed_strings=budget.trimmed_strings,
        trimmed_arrays=budget.trimmed_arrays,
    )
    if result.truncated:
        logger.debug(
            "serialize: circular_refs=%d trimmed_strings=%d trimmed_arrays=%d",
            result.circular_refs,
            result.trimmed_strings,
            result.trimmed_arrays,
        )
    return result


def stringify(
    value: Any,
    indent: int | str | None = None,
    compact: bool = False,
    max_string_length: int | None = None,
    max_array_size: int | None = None,
) -> str:
    """Повертає лише текст серіалізації.

    Без бюджетів і без `compact` спершу пробуємо stdlib `json.dumps` (швидше);
    якщо він падає (цикл, нестандартний тип), мовчки робимо bounded-рендер.
    Результат в обох гілках однаковий.
    """

    if max_string_length is None and max_array_size is None and not compact:
        try:
            return _native_dumps(value, indent)
        except (ValueError, TypeError, RecursionError) as exc:
            logger.debug("stringify: fallback на bounded-рендер (%s)", type(exc).__name__)
    return serialize(
        value,
        indent=indent,
        compact=compact,
        max_string_length=max_string_length,
        max_array_size=max_array_size,
    ).text


def json_loads(data: str | bytes | bytearray) -> Any:
    """Десеріалізує JSON у Python-об'єкт (порядок ключів зберігається).

    Для bytes використовуємо UTF-8 з ``errors='replace'`` (консервативно,
    без винятків на декодуванні).
    """

    if isinstance(data, (bytes, bytearray)):
        text = data.decode("utf-8", errors="replace")
    else:
        text = data
    return json.loads(text)


# ── Rendering ─────────────────────────────────────────────────────────────


def _indent_unit(indent: int | str | None) -> str | None:
    if indent is None:
        return None
    if isinstance(indent, int):
        return " " * indent
    return indent


def _native_dumps(value: Any, indent: int | str | None) -> str:
    # Роздільники підібрані так, щоб текст збігався з `serialize(..., compact=False)`.
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(
        value,
        indent=indent,
        separators=separators,
        ensure_ascii=False,
        allow_nan=True,
    )


def _render(value: Any, budget: _Budget) -> str:
    if value is None or isinstance(value, (bool, int, float)):
        return _render_scalar(value)

    if isinstance(value, str):
        return _render_string(value, budget)

    if not isinstance(value, (Mapping, list, tuple)):
        return _render_opaque(value)

    level = budget.positions.get(id(value))
    if level is not None:
        budget.circular_refs += 1
        return json.dumps(_circular_marker(level), ensure_ascii=False)

    budget.positions[id(value)] = len(budget.ancestors)
    budget.ancestors.append(value)
    try:
        if isinstance(value, Mapping):
            return _render_mapping(value, budget)
        return _render_array(value, budget)
    finally:
        budget.ancestors.pop()
        del budget.positions[id(value)]


def _render_scalar(value: None | bool | int | float) -> str:
    try:
        return json.dumps(value, allow_nan=True)
    except (TypeError, ValueError):
        # int-підкласи з "ламким" __repr__ тощо.
        return _render_opaque(value)


def _render_string(value: str, budget: _Budget) -> str:
    limit = budget.max_string_length
    if limit is not None and len(value) > limit:
        keep = max(0, limit - STRING_TRIM_RESERVE)
        more = len(value) - limit + STRING_TRIM_RESERVE
        value = value[:keep] + MORE_CHARS_MARKER.format(count=more)
        budget.trimmed_strings += 1
    return json.dumps(value, ensure_ascii=False)


def _render_opaque(value: Any) -> str:
    try:
        text = str(value)
    except Exception:  # noqa: BLE001 - opaque-об'єкт може мати будь-який __str__
        text = f"<{type(value).__name__}>"
    return json.dumps(text, ensure_ascii=False)


def _circular_marker(level: int) -> str:
    if level == 0:
        return CIRCULAR_ROOT_MARKER
    return CIRCULAR_PARENT_MARKER.format(level=level)


def _render_array(value: list[Any] | tuple[Any, ...], budget: _Budget) -> str:
    items = list(value)
    marker: str | None = None
    limit = budget.max_array_size
    if limit is not None and len(items) > limit:
        budget.trimmed_arrays += 1
        marker = MORE_ITEMS_MARKER.format(count=len(items) - limit + 1)
        items = items[: max(0, limit - 1)]

    parts = [_render(item, budget) for item in items]
    if marker is not None:
        # Маркер не проходить через бюджет рядків, інакше його можна обрізати.
        parts.append(json.dumps(marker, ensure_ascii=False))
    return _compose(parts, "[", "]", budget)


def _render_mapping(value: Mapping[Any, Any], budget: _Budget) -> str:
    spacer = "" if budget.indent is None else " "
    parts = []
    for key, child in value.items():
        key_text = json.dumps(_key_text(key), ensure_ascii=False)
        parts.append(f"{key_text}:{spacer}{_render(child, budget)}")
    return _compose(parts, "{", "}", budget)


def _key_text(key: Any) -> str:
    """Ключ мапи як рядок (так само, як це робить stdlib `json`)."""

    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        try:
            return json.dumps(key, allow_nan=True)
        except (TypeError, ValueError):
            pass
    return str(key)


def _compose(parts: list[str], open_: str, close: str, budget: _Budget) -> str:
    if not parts:
        return f"{open_}{close}"

    unit = budget.indent
    if unit is None:
        return f"{open_}{','.join(parts)}{close}"

    fits_one_line = (
        budget.compact
        and sum(len(part) for part in parts) < COMPACT_WIDTH_THRESHOLD
        and not any("\n" in part for part in parts)
    )
    if fits_one_line:
        return f"{open_}{', '.join(parts)}{close}"

    # ancestors уже містить поточний контейнер, тож глибина = len - 1.
    outer = unit * (len(budget.ancestors) - 1)
    inner = ",\n".join(f"{outer}{unit}{part}" for part in parts)
    return f"{open_}\n{inner}\n{outer}{close}"


__all__ = (
    "SerializationResult",
    "json_loads",
    "serialize",
    "stringify",
)
