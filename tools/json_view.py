"""Консольний JSON viewer: bounded-серіалізація + Rich-підсвічування.

Ціль:
- подивитися великий/"брудний" JSON без ризику залити термінал мегабайтами;
- знайти шлях до значення за ключовим словом;
- отримати швидку аналітику по масиву записів.

Приклад:
    python -m tools.json_view payload.json --max-string-length 80 --max-array-size 20
    cat payload.json | python -m tools.json_view - --find XAUUSD --ignore-case

Exit codes:
- 0: успіх
- 1: `--find` нічого не знайшов
- 2: помилка читання/парсингу входу або некоректна конфігурація
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from app.settings import Settings, load_theme
from config.config import DEFAULT_LOG_LEVEL, ENV_PREFIX
from core.formatters import fmt_file_size, fold_text
from core.insights import data_insights
from core.serialization import json_loads
from core.traversal import fuzzy_find
from UI.json_view import JsonView
from utils.rich_console import configure_logging

logger = logging.getLogger("tools.json_view")

_INSIGHT_TOP_VALUES = 5
_INSIGHT_VALUE_WIDTH = 40


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    logger.debug("Читаємо %s (%s)", path, fmt_file_size(path.stat().st_size))
    return path.read_text(encoding="utf-8")


def _optional_budget(raw: str) -> int | None:
    value = raw.strip().lower()
    if value in {"none", "unlimited", "0"}:
        return None
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("бюджет має бути >= 0")
    return number


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tools.json_view",
        description="Перегляд JSON з обмеженням розміру та підсвічуванням.",
    )
    p.add_argument("source", help="Шлях до JSON-файлу або '-' для stdin")
    p.add_argument("--indent", type=int, default=None, help="Відступ (пробіли)")
    p.add_argument(
        "--no-compact",
        dest="compact",
        action="store_false",
        default=None,
        help="Не стискати короткі контейнери в один рядок",
    )
    # SUPPRESS: відсутній прапорець не потрапляє в Namespace, а явний `unlimited` дає None.
    p.add_argument("--max-string-length", type=_optional_budget, default=argparse.SUPPRESS)
    p.add_argument("--max-array-size", type=_optional_budget, default=argparse.SUPPRESS)
    p.add_argument("--large", action="store_true", help="Легке підсвічування (ключі + маркери)")
    p.add_argument("--plain", action="store_true", help="Без кольорів і рамки")
    p.add_argument("--title", default=None)
    p.add_argument("--find", default=None, metavar="KEYWORD")
    p.add_argument("--ignore-case", action="store_true")
    p.add_argument("--insights", action="store_true", help="Аналітика по масиву записів")
    p.add_argument("--log-level", default=None)
    return p


def _resolve_view(args: argparse.Namespace, cfg: Settings) -> JsonView:
    overrides: dict[str, Any] = {}
    if args.indent is not None:
        overrides["indent"] = args.indent
    if args.compact is not None:
        overrides["compact"] = args.compact
    for budget in ("max_string_length", "max_array_size"):
        if hasattr(args, budget):
            overrides[budget] = getattr(args, budget)
    effective = cfg.model_copy(update=overrides)
    return JsonView.from_settings(
        effective,
        theme=load_theme(effective.theme_path),
        title=args.title or args.source,
    )


def build_insights_table(items: list[Mapping[str, Any]]) -> Table:
    """Таблиця розподілів значень по властивостях записів."""

    table = Table(title="Insights", show_lines=False)
    table.add_column("property", style="bold blue")
    table.add_column("unique", justify="right")
    table.add_column("top values")
    for stat in data_insights(items):
        top = stat["unique_values"][:_INSIGHT_TOP_VALUES]
        rendered = ", ".join(
            f"{fold_text(entry['value'], _INSIGHT_VALUE_WIDTH)} ×{entry['count']}"
            for entry in top
        )
        table.add_row(stat["prop_name"], str(len(stat["unique_values"])), rendered)
    return table


def main(argv: list[str] | None = None, *, console: Console | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        cfg = Settings()
    except ValueError as exc:
        # pydantic ValidationError є підкласом ValueError.
        configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
        logger.error("Некоректна конфігурація %s*: %s", ENV_PREFIX, exc)
        return 2
    configure_logging(args.log_level or cfg.log_level)
    out = console or Console()

    try:
        value = json_loads(_read_source(args.source))
        view = _resolve_view(args, cfg)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError є підкласом ValueError.
        logger.error("Не вдалося прочитати %s: %s", args.source, exc)
        return 2

    if args.find is not None:
        path = fuzzy_find(value, args.find, case_sensitive=not args.ignore_case)
        if path is None:
            logger.warning("Ключове слово %r не знайдено", args.find)
            return 1
        out.print(".".join(path) if path else "<root>", markup=False, highlight=False)
        return 0

    if args.insights:
        if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
            logger.error("--insights очікує масив об'єктів на верхньому рівні")
            return 2
        out.print(build_insights_table(value))
        return 0

    if args.plain:
        result = view.serialize(value)
        out.print(result.text, markup=False, highlight=False, soft_wrap=True)
    else:
        out.print(view.render_panel(value, large=args.large))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
