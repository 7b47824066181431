"""Контракти (schemas) між модулями проєкту.

Тут зберігаються TypedDict-описання даних, які `core/` віддає споживачам
(UI, CLI), щоб форма результату не "розповзалася" по репо.

Принцип: contract-first — спочатку описуємо payload, потім імплементуємо.
"""

from __future__ import annotations

from .json_view import PropStat, Segment, SerializeStats, ValueCount

__all__ = [
    "PropStat",
    "Segment",
    "SerializeStats",
    "ValueCount",
]
