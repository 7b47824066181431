"""SSOT для форматування чисел/часу/рядків в UI та логах.

Цей модуль НЕ містить бізнес-логіки. Лише універсальні форматтери для
читабельних рядків і календарні межі (день/тиждень/місяць/рік).

Принципи:
- однаковий формат у всіх місцях;
- контрольоване округлення (явні `digits`);
- локальний час там, де не задано зсув явно.
"""

from __future__ import annotations

# ── Imports ───────────────────────────────────────────────────────────────
import calendar
from datetime import UTC, date, datetime, time, timedelta
from typing import Final, Literal

from config.config import FOLD_ELLIPSIS

BoundaryKind = Literal["day", "week", "month", "year"]

# ── Numbers ───────────────────────────────────────────────────────────────

_KB: Final[int] = 1024
_MB: Final[int] = 1024 * 1024
_GB: Final[int] = 1024 * 1024 * 1024


def fmt_file_size(size: int) -> str:
    """Форматує розмір у байтах як `B/KB/MB/GB` (2 знаки після коми)."""

    if size < _KB:
        return f"{size} B"
    if size < _MB:
        return f"{size / _KB:.2f} KB"
    if size < _GB:
        return f"{size / _MB:.2f} MB"
    return f"{size / _GB:.2f} GB"


def fmt_float(value: float, digits: int = 2, min_digits: int = 0) -> str:
    """Форматує число з не більше ніж `digits` та не менше ніж `min_digits` знаками.

    Без групування розрядів: `1234.5` -> `1234.5`, а не `1,234.5`.
    """

    text = f"{value:.{digits}f}"
    if "." not in text:
        return text
    whole, frac = text.split(".")
    frac = frac.rstrip("0")
    if len(frac) < min_digits:
        frac = frac.ljust(min_digits, "0")
    return f"{whole}.{frac}" if frac else whole


# ── Time ──────────────────────────────────────────────────────────────────


def fmt_time(dt: datetime, tz_offset_minutes: int | None = None) -> str:
    """Форматує час як `YYYY-MM-DD HH:MM:SS`.

    `tz_offset_minutes` має знак як у JS `getTimezoneOffset()`:
    `-480` — UTC+8, `480` — UTC-8, `0` — UTC. None — локальна зона пристрою.
    """

    if tz_offset_minutes is None:
        local = dt.astimezone() if dt.tzinfo is not None else dt
        return local.strftime("%Y-%m-%d %H:%M:%S")

    aware = dt if dt.tzinfo is not None else dt.astimezone()
    shifted = aware.astimezone(UTC) - timedelta(minutes=tz_offset_minutes)
    return shifted.strftime("%Y-%m-%d %H:%M:%S")


def fmt_date(dt: datetime, tz_offset_minutes: int | None = None) -> str:
    """Як `fmt_time`, але лише дата `YYYY-MM-DD`."""

    return fmt_time(dt, tz_offset_minutes)[:10]


def parse_date(text: str) -> datetime:
    """Парсить ISO-рядок у naive локальний datetime.

    Рядок без часу (`2024-05-01`) трактується як локальна північ, а не UTC.
    """

    if ":" not in text:
        return datetime.combine(date.fromisoformat(text.strip()), time.min)
    return datetime.fromisoformat(text.strip())


def date_boundaries(
    t: datetime,
    kind: BoundaryKind,
    offset: int = 0,
) -> tuple[datetime, datetime]:
    """Повертає (start, end) календарного періоду, що містить `t`.

    - `offset` зсуває період: 1 — наступний, -1 — попередній;
    - тиждень починається з понеділка;
    - start = 00:00:00.000, end = 23:59:59.999 (мілісекундна точність).
    """

    day = t.date()
    if kind == "day":
        start_day = day + timedelta(days=offset)
        end_day = start_day
    elif kind == "week":
        # weekday(): понеділок = 0, тож це і є зсув до початку тижня.
        start_day = day - timedelta(days=day.weekday()) + timedelta(weeks=offset)
        end_day = start_day + timedelta(days=6)
    elif kind == "month":
        year, month = divmod(day.month - 1 + offset, 12)
        year += day.year
        month += 1
        start_day = date(year, month, 1)
        end_day = date(year, month, calendar.monthrange(year, month)[1])
    elif kind == "year":
        start_day = date(day.year + offset, 1, 1)
        end_day = date(day.year + offset, 12, 31)
    else:
        raise ValueError(f"Невідомий тип періоду: {kind!r}")

    start = datetime.combine(start_day, time.min, tzinfo=t.tzinfo)
    end = datetime.combine(end_day, time(23, 59, 59, 999_000), tzinfo=t.tzinfo)
    return start, end


# ── Strings ───────────────────────────────────────────────────────────────


def fold_text(content: str, max_length: int) -> str:
    """Скорочує рядок посередині: `початок...кінець` довжиною <= `max_length`."""

    if len(content) <= max_length:
        return content
    side = max(0, (max_length - len(FOLD_ELLIPSIS)) // 2)
    tail = content[len(content) - side :] if side else ""
    return f"{content[:side]}{FOLD_ELLIPSIS}{tail}"


__all__ = (
    "BoundaryKind",
    "date_boundaries",
    "fmt_date",
    "fmt_file_size",
    "fmt_float",
    "fmt_time",
    "fold_text",
    "parse_date",
)
