"""Швидка аналітика по масиву записів (dict-ів) для табличних UI.

Дає:
- `data_properties` — перелік властивостей у порядку першої появи;
- `data_insights` — розподіли значень по властивостях, відфільтровані так,
  щоб лишалися лише "цікаві" (придатні для фільтрів/групування).
"""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from core.contracts import PropStat
from core.serialization import stringify
from core.traversal import number_text

# Поріг "малих" розподілів: при top-count <= 10 вимагаємо хоч якісь повтори.
_SMALL_TOP_COUNT = 10
_MIN_REPEAT_RATIO = 0.1


def data_properties(items: Iterable[Mapping[str, Any]]) -> list[str]:
    """Об'єднання ключів усіх записів у порядку першої появи."""

    seen: dict[str, None] = {}
    for item in items:
        for key in item:
            seen.setdefault(str(key), None)
    return list(seen)


def data_insights(items: Iterable[Mapping[str, Any]]) -> list[PropStat]:
    """Розподіл значень по кожній властивості.

    - значення-масиви рахуються поелементно;
    - контейнери рахуються за їх компактним JSON-текстом;
    - результат відсортований за кількістю унікальних значень (зростання).
    """

    counters: dict[str, Counter[str]] = {}
    for item in items:
        for key, value in item.items():
            counter = counters.setdefault(str(key), Counter())
            if isinstance(value, list):
                for element in value:
                    counter[_value_key(element)] += 1
            else:
                counter[_value_key(value)] += 1

    stats: list[PropStat] = []
    for prop, counter in counters.items():
        ranked = sorted(counter.items(), key=lambda pair: pair[1], reverse=True)
        stats.append(
            {
                "prop_name": prop,
                "unique_values": [{"value": v, "count": c} for v, c in ranked],
            }
        )

    good = [stat for stat in stats if _is_good_stat(stat)]
    good.sort(key=lambda stat: len(stat["unique_values"]))
    return good


def _value_key(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        return stringify(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number_text(value)
    return str(value)


def _is_good_stat(stat: PropStat) -> bool:
    values = stat["unique_values"]
    if len(values) < 2:
        return False
    repeated = sum(1 for entry in values if entry["count"] > 1)
    top = values[0]["count"]
    if top <= _SMALL_TOP_COUNT and repeated / len(values) < _MIN_REPEAT_RATIO:
        return False
    return True


__all__ = ("data_insights", "data_properties")
