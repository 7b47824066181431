"""Rich-рендерер для JSON-подібних значень (підсвічування + бюджети).

Мета:
- приймати довільне значення або вже готовий JSON-текст;
- серіалізувати через bounded-серіалізатор (цикли/обрізання не ламають UI);
- розфарбувати сегменти з `core.segmentation` стилями з теми;
- повертати Rich-об'єкти (Text/Panel), які можна вставити в будь-який UI.

Клас не містить прихованого стану й не зберігає кешів.
"""

from __future__ import annotations

from typing import Any

from rich.panel import Panel
from rich.text import Text

from app.settings import Settings, ViewerTheme
from core.segmentation import Rule, json_rules, marker_rules, segment_by_regex
from core.serialization import SerializationResult, serialize

_KEY_RULE: Rule = (r'"[^"]+":', "key")


def highlight_text(
    text: str,
    rules: list[Rule],
    theme: ViewerTheme | None = None,
) -> Text:
    """Сегментує `text` правилами і повертає Rich Text.

    Категорія сегмента мапиться на стиль через тему; невідома категорія
    використовується як стиль напряму (наприклад `"red"`).
    """

    theme = theme or ViewerTheme()
    result = Text()
    for segment in segment_by_regex(text, rules):
        category = segment["category"]
        style = theme.style_for(category) if category else ""
        result.append(segment["content"], style=style or None)
    return result


class JsonView:
    """Рендерер значень у підсвічений JSON."""

    def __init__(
        self,
        *,
        theme: ViewerTheme | None = None,
        indent: int | str | None = 2,
        compact: bool = True,
        max_string_length: int | None = None,
        max_array_size: int | None = None,
        title: str | None = None,
    ) -> None:
        self._theme = theme or ViewerTheme()
        self._indent = indent
        self._compact = compact
        self._max_string_length = max_string_length
        self._max_array_size = max_array_size
        self._title = title or "JSON"

    @classmethod
    def from_settings(
        cls,
        cfg: Settings,
        *,
        theme: ViewerTheme | None = None,
        title: str | None = None,
    ) -> JsonView:
        return cls(
            theme=theme,
            indent=cfg.indent,
            compact=cfg.compact,
            max_string_length=cfg.max_string_length,
            max_array_size=cfg.max_array_size,
            title=title,
        )

    def serialize(self, value: Any) -> SerializationResult:
        return serialize(
            value,
            indent=self._indent,
            compact=self._compact,
            max_string_length=self._max_string_length,
            max_array_size=self._max_array_size,
        )

    def render_text(self, content: str, custom_rules: list[Rule] | None = None) -> Text:
        """Повне JSON-підсвічування; `custom_rules` мають вищий пріоритет."""

        rules = [*(custom_rules or []), *json_rules()]
        return highlight_text(content, rules, self._theme)

    def render_large_text(self, content: str) -> Text:
        """Легкий режим для великих документів: лише ключі та маркери."""

        return highlight_text(content, [*marker_rules(), _KEY_RULE], self._theme)

    def render_value(self, value: Any, *, large: bool = False) -> tuple[Text, SerializationResult]:
        result = self.serialize(value)
        if large:
            return self.render_large_text(result.text), result
        return self.render_text(result.text, marker_rules()), result

    def render_panel(self, value: Any, *, title: str | None = None, large: bool = False) -> Panel:
        """Панель з підсвіченим значенням і статистикою обрізань у підписі."""

        body, result = self.render_value(value, large=large)
        return Panel(
            body,
            title=Text(title or self._title),
            subtitle=Text(self._summarize(result)),
            border_style="yellow" if result.truncated else "cyan",
        )

    @staticmethod
    def _summarize(result: SerializationResult) -> str:
        if not result.truncated:
            return "повний вивід"
        return (
            f"circular: {result.circular_refs} | "
            f"strings: {result.trimmed_strings} | "
            f"arrays: {result.trimmed_arrays}"
        )


__all__ = ("JsonView", "highlight_text")
