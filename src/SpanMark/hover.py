"""Turn language-server hover payloads into styled text.

A hover's ``contents`` may be a plain string, a marked string
(``{"language", "value"}``), a list of either, or a markup content
(``{"kind", "value"}``). Missing parts become empty strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .model import StyleConfig, StyledText
from .renderer_spans import render


@dataclass(frozen=True)
class MarkedString:
    language: str | None
    value: str | None


@dataclass(frozen=True)
class MarkupContent:
    kind: str
    value: str | None


def hover_markdown(contents: Any) -> str:
    if contents is None:
        return ""
    if isinstance(contents, Mapping) and "contents" in contents:
        return hover_markdown(contents["contents"])
    if isinstance(contents, (list, tuple)):
        return "\n\n".join(_format_marked(item) for item in contents)
    if isinstance(contents, MarkupContent):
        return contents.value or ""
    if isinstance(contents, Mapping) and "kind" in contents:
        return contents.get("value") or ""
    return _format_marked(contents)


def _format_marked(item: Any) -> str:
    if item is None:
        return ""
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        item = MarkedString(language=item.get("language"), value=item.get("value"))
    if not isinstance(item, MarkedString) or item.value is None:
        return ""
    if not item.language:
        return item.value
    return f"```{item.language}\n{item.value}\n```"


def hover_style(text_color: str, highlight_color: str, code_font: str = "Courier New") -> StyleConfig:
    return StyleConfig(
        bold_color=highlight_color,
        inline_code_color=highlight_color,
        block_code_color=text_color,
        code_font=code_font,
        link_color=highlight_color,
    )


def render_hover(contents: Any, style: StyleConfig | None = None) -> StyledText:
    return render(hover_markdown(contents), style)
