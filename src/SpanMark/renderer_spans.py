from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .markdown_parser import parse_markdown
from .model import (
    Block,
    Bold,
    Code,
    CodeBlock,
    Heading,
    HorizontalRule,
    Inline,
    Italic,
    Link,
    ListBlock,
    Paragraph,
    Quote,
    Span,
    StyleConfig,
    StyledText,
    StyleKind,
    Text,
)

BLOCK_SEPARATOR = "\n\n"
QUOTE_PREFIX = "│ "
BULLET = "• "
HORIZONTAL_RULE = "─" * 10


@dataclass
class RenderState:
    chunks: list[str] = field(default_factory=list)
    spans: list[Span] = field(default_factory=list)
    length: int = 0

    def append(self, text: str) -> None:
        if text:
            self.chunks.append(text)
            self.length += len(text)

    def ends_with_newline(self) -> bool:
        return bool(self.chunks) and self.chunks[-1].endswith("\n")

    def mark(self, start: int, end: int, kind: StyleKind, value: Any = None) -> None:
        self.spans.append(Span(start, end, kind, value))

    def result(self) -> StyledText:
        return StyledText(text="".join(self.chunks), spans=tuple(self.spans))


def render(markdown: str, style: StyleConfig | None = None) -> StyledText:
    """Normalize, parse and style ``markdown`` in one pass."""
    return build_styled_text(parse_markdown(markdown), style or StyleConfig())


def build_styled_text(blocks: Iterable[Block], style: StyleConfig) -> StyledText:
    state = RenderState()
    first = True
    for block in blocks:
        if state.length and not first:
            state.append(BLOCK_SEPARATOR)
        _dispatch_block(state, block, style)
        first = False
    return state.result()


def _dispatch_block(state: RenderState, block: Block, style: StyleConfig) -> None:
    if isinstance(block, Heading):
        _render_heading(state, block, style)
    elif isinstance(block, Paragraph):
        _append_inlines(state, block.inlines, style)
    elif isinstance(block, CodeBlock):
        _render_code_block(state, block, style)
    elif isinstance(block, ListBlock):
        _render_list(state, block, style)
    elif isinstance(block, Quote):
        _render_quote(state, block, style)
    elif isinstance(block, HorizontalRule):
        state.append(HORIZONTAL_RULE)
    else:
        raise TypeError(f"Unsupported block: {block!r}")


def _render_heading(state: RenderState, heading: Heading, style: StyleConfig) -> None:
    start = state.length
    _append_inlines(state, heading.inlines, style)
    state.mark(start, state.length, StyleKind.BOLD)
    scale = style.scale_for(heading.level)
    if scale is not None:
        state.mark(start, state.length, StyleKind.RELATIVE_SIZE, scale)


def _render_code_block(state: RenderState, block: CodeBlock, style: StyleConfig) -> None:
    start = state.length
    state.append(block.content)
    if state.length > start:
        state.mark(start, state.length, StyleKind.TYPEFACE, style.code_font)
        state.mark(start, state.length, StyleKind.COLOR, style.block_code_color)


def _render_list(state: RenderState, block: ListBlock, style: StyleConfig) -> None:
    number = block.start_index
    for item in block.items:
        if state.length and not state.ends_with_newline():
            state.append("\n")
        label_start = state.length
        if block.ordered:
            state.append(f"{number}. ")
            number += 1
        else:
            state.append(BULLET)
        label_end = state.length
        _append_inlines(state, item, style)
        state.mark(label_start, state.length, StyleKind.LEADING_MARGIN, _margin(style))
        if not block.ordered:
            state.mark(label_start, label_end, StyleKind.BOLD)


def _render_quote(state: RenderState, quote: Quote, style: StyleConfig) -> None:
    start = state.length
    state.append(QUOTE_PREFIX)
    content_start = state.length
    _append_inlines(state, quote.inlines, style)
    state.mark(content_start, state.length, StyleKind.ITALIC)
    state.mark(start, state.length, StyleKind.LEADING_MARGIN, _margin(style))


def _margin(style: StyleConfig) -> tuple[int, int]:
    return style.leading_margin, style.leading_margin + style.indent_margin


def _append_inlines(state: RenderState, inlines: Iterable[Inline], style: StyleConfig) -> None:
    for inline in inlines:
        start = state.length
        if isinstance(inline, Text):
            state.append(inline.value)
        elif isinstance(inline, Bold):
            _append_inlines(state, inline.children, style)
            state.mark(start, state.length, StyleKind.BOLD)
            state.mark(start, state.length, StyleKind.COLOR, style.bold_color)
        elif isinstance(inline, Italic):
            _append_inlines(state, inline.children, style)
            state.mark(start, state.length, StyleKind.ITALIC)
        elif isinstance(inline, Code):
            state.append(inline.value)
            state.mark(start, state.length, StyleKind.TYPEFACE, style.code_font)
            state.mark(start, state.length, StyleKind.COLOR, style.inline_code_color)
        elif isinstance(inline, Link):
            _append_inlines(state, inline.label, style)
            state.mark(start, state.length, StyleKind.URL, inline.url)
            if style.link_color is not None:
                state.mark(start, state.length, StyleKind.COLOR, style.link_color)
        else:
            raise TypeError(f"Unsupported inline: {inline!r}")
