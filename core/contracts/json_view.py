"""Канонічні контракти для JSON viewer-а (сегменти, статистика обрізань).

Призначення:
- SSOT для TypedDict, які віддає `core/` назовні (highlighter, viewer, CLI);
- UI імпортує ці типи звідси, а не з модулів-реалізацій.

Важливо:
- `core/` не імпортує `UI/*`.
"""

from __future__ import annotations

from typing import TypedDict

# ── Segmentation ──────────────────────────────────────────────────────────


class Segment(TypedDict):
    """Шматок тексту з категорією.

    Порожня категорія (`""`) означає "проміжок" між збігами правил.
    Конкатенація `content` усіх сегментів дорівнює вхідному тексту.
    """

    content: str
    category: str


# ── Serialization ─────────────────────────────────────────────────────────


class SerializeStats(TypedDict):
    """Лічильники одного виклику серіалізації (монотонні в межах виклику)."""

    circular_refs: int
    trimmed_strings: int
    trimmed_arrays: int


# ── Insights ──────────────────────────────────────────────────────────────


class ValueCount(TypedDict):
    value: str
    count: int


class PropStat(TypedDict):
    """Розподіл значень однієї властивості по масиву записів."""

    prop_name: str
    unique_values: list[ValueCount]
