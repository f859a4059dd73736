from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple, Union

DEFAULT_HEADING_SCALE: Tuple[float, ...] = (1.6, 1.4, 1.25, 1.1, 1.05, 1.0)


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Bold:
    children: Tuple["Inline", ...]


@dataclass(frozen=True)
class Italic:
    children: Tuple["Inline", ...]


@dataclass(frozen=True)
class Code:
    """Inline code span; its value is never re-parsed."""

    value: str


@dataclass(frozen=True)
class Link:
    label: Tuple["Inline", ...]
    url: str


Inline = Union[Text, Bold, Italic, Code, Link]


@dataclass(frozen=True)
class Heading:
    level: int
    inlines: Tuple[Inline, ...]


@dataclass(frozen=True)
class Paragraph:
    inlines: Tuple[Inline, ...]


@dataclass(frozen=True)
class CodeBlock:
    content: str


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: Tuple[Tuple[Inline, ...], ...]
    start_index: int = 1


@dataclass(frozen=True)
class Quote:
    inlines: Tuple[Inline, ...]


@dataclass(frozen=True)
class HorizontalRule:
    """Horizontal rule / thematic break."""


Block = Union[Heading, Paragraph, CodeBlock, ListBlock, Quote, HorizontalRule]


@dataclass(frozen=True)
class StyleConfig:
    """Colors, code font and heading scale used for one render call."""

    bold_color: str = "#1E88E5"
    inline_code_color: str = "#D81B60"
    block_code_color: str = "#424242"
    code_font: str = "Courier New"
    link_color: str | None = None
    heading_scale: Tuple[float, ...] = DEFAULT_HEADING_SCALE
    leading_margin: int = 24
    indent_margin: int = 24

    def scale_for(self, level: int) -> float | None:
        if not self.heading_scale:
            return None
        index = min(max(level - 1, 0), len(self.heading_scale) - 1)
        return self.heading_scale[index]


class StyleKind(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    COLOR = "color"
    TYPEFACE = "typeface"
    RELATIVE_SIZE = "relative_size"
    URL = "url"
    LEADING_MARGIN = "leading_margin"


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    kind: StyleKind
    value: Any = None


@dataclass(frozen=True)
class StyledText:
    text: str = ""
    spans: Tuple[Span, ...] = field(default_factory=tuple)

    def spans_of(self, kind: StyleKind) -> list[Span]:
        return [span for span in self.spans if span.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        spans = []
        for span in self.spans:
            value = list(span.value) if isinstance(span.value, tuple) else span.value
            spans.append([span.start, span.end, span.kind.value, value])
        return {"text": self.text, "spans": spans}
