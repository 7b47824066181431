"""Спільний Rich Console та налаштування логування для CLI.

Критично: вивід viewer-а і RichHandler (логи) мають писати в один stderr Console,
інакше логи та панелі перемішуються й "рвуться" під час рендеру.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_RICH_CONSOLE: Console | None = None


def get_rich_console() -> Console:
    """Повертає singleton Console(stderr=True) для логів."""

    global _RICH_CONSOLE
    if _RICH_CONSOLE is not None:
        return _RICH_CONSOLE

    _RICH_CONSOLE = Console(stderr=True)
    return _RICH_CONSOLE


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Вішає один RichHandler на root-логер (ідемпотентно).

    Повторний виклик лише оновлює рівень, не додаючи дублікатів хендлерів.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(
            RichHandler(console=get_rich_console(), show_path=False, markup=False)
        )
    return root


__all__ = ("configure_logging", "get_rich_console")
