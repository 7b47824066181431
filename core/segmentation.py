"""Розбиття тексту на категоризовані сегменти за пріоритетними regex-правилами.

Правила йдуть у порядку пріоритету (індекс 0 — найвищий). Збіг правила
приймається, лише якщо не перетинається з уже прийнятими збігами правил
вищого пріоритету. Результат покриває весь текст: проміжки між збігами
віддаються як сегменти з порожньою категорією.

Патерни не валідуються: catastrophic backtracking — відповідальність того,
хто передав правило.
"""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
import re
from bisect import bisect_left
from typing import NamedTuple

from core.contracts import Segment

Rule = tuple[str | re.Pattern[str], str]

# ── JSON rules ────────────────────────────────────────────────────────────

# Порядок важливий: `key` має йти раніше за `string`, інакше ключі стануть рядками.
_JSON_RULES: tuple[tuple[str, str], ...] = (
    (r'"[^"]+":', "key"),
    (r'"(?:[^"\\]|\\.)*"', "string"),
    (r"\d+", "number"),
    (r"true", "true"),
    (r"false", "false"),
    (r"null", "null"),
    (r"[{}\[\]:,]", "punctuation"),
)

_MARKER_RULES: tuple[tuple[str, str], ...] = (
    (r"…[0-9]+ more (?:chars|items)…", "truncated"),
    (r"<<circular ref to (?:the root object|parent level [0-9]+)>>", "circular"),
)


class _Match(NamedTuple):
    start: int
    end: int
    category: str


def json_rules() -> list[Rule]:
    """Фіксований набір правил для JSON (key, string, number, true, false, null, punctuation)."""

    return [(re.compile(pattern), category) for pattern, category in _JSON_RULES]


def marker_rules() -> list[Rule]:
    """Правила для діагностичних маркерів bounded-серіалізатора."""

    return [(re.compile(pattern), category) for pattern, category in _MARKER_RULES]


# ── Segmentation ──────────────────────────────────────────────────────────


def segment_by_regex(text: str, rules: list[Rule]) -> list[Segment]:
    """Розбиває `text` на сегменти `{content, category}` за правилами `rules`.

    Конкатенація `content` результату завжди дорівнює `text`.
    Збіги нульової довжини ігноруються.
    """

    accepted = _collect_matches(text, rules)

    segments: list[Segment] = []
    cursor = 0
    for match in accepted:
        if cursor < match.start:
            segments.append({"content": text[cursor : match.start], "category": ""})
        segments.append({"content": text[match.start : match.end], "category": match.category})
        cursor = match.end
    if cursor < len(text):
        segments.append({"content": text[cursor:], "category": ""})
    return segments


def segment_json(text: str) -> list[Segment]:
    """Сегментація JSON-тексту фіксованим набором правил `json_rules()`."""

    return segment_by_regex(text, json_rules())


def _collect_matches(text: str, rules: list[Rule]) -> list[_Match]:
    # Прийняті збіги тримаємо відсортованими за start; вони не перетинаються,
    # тож і end у тому ж порядку зростає.
    starts: list[int] = []
    accepted: list[_Match] = []

    for pattern, category in rules:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        pending: list[_Match] = []
        for found in regex.finditer(text):
            start, end = found.span()
            if start == end:
                continue
            if _overlaps(start, end, starts, accepted):
                continue
            pending.append(_Match(start, end, category))

        # Збіги одного правила між собою не перетинаються (один finditer),
        # тому додаємо їх лише після повного проходу правила.
        for match in pending:
            pos = bisect_left(starts, match.start)
            starts.insert(pos, match.start)
            accepted.insert(pos, match)

    return accepted


def _overlaps(start: int, end: int, starts: list[int], accepted: list[_Match]) -> bool:
    pos = bisect_left(starts, start)
    # Сусід зліва може "накривати" start, сусід справа може починатися до end.
    if pos > 0 and accepted[pos - 1].end > start:
        return True
    if pos < len(accepted) and accepted[pos].start < end:
        return True
    return False


__all__ = (
    "Rule",
    "json_rules",
    "marker_rules",
    "segment_by_regex",
    "segment_json",
)
