from __future__ import annotations

import logging
import re
from typing import List

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
    Text,
)
from .normalizer import normalize

logger = logging.getLogger(__name__)

FENCE = "```"
MAX_INLINE_DEPTH = 64

_UNORDERED_RE = re.compile(r"[*\-+]\s+.+")
_ORDERED_RE = re.compile(r"(\d+)\.\s+.+")
_MARKER_RE = re.compile(r"(?:\d+\.|[*\-+])\s+")
_SPECIAL_CHARS = "`*_["
_BRACKET_RE = re.compile(r"[\[\]()]")
_OPENERS = {"]": "[", ")": "("}


def parse_markdown(text: str) -> List[Block]:
    blocks = parse_blocks(normalize(text))
    logger.debug("Parsed %d blocks", len(blocks))
    return blocks


def parse_blocks(text: str) -> List[Block]:
    blocks: List[Block] = []
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if not line:
            i += 1
        elif line.startswith(FENCE):
            block, i = _parse_code_block(lines, i)
            blocks.append(block)
        elif _is_heading(line):
            blocks.append(_parse_heading(line))
            i += 1
        elif _is_horizontal_rule(line):
            blocks.append(HorizontalRule())
            i += 1
        elif _is_quote(line):
            block, i = _parse_quote(lines, i)
            blocks.append(block)
        elif _is_list(line):
            block, i = _parse_list(lines, i)
            blocks.append(block)
        else:
            block, i = _parse_paragraph(lines, i)
            blocks.append(block)
    return blocks


def _parse_code_block(lines: List[str], index: int) -> tuple[CodeBlock, int]:
    # The info string after the opening fence is not kept.
    body: list[str] = []
    i = index + 1
    while i < len(lines):
        line = lines[i]
        i += 1
        if line.strip().startswith(FENCE):
            break
        body.append(line)
    return CodeBlock(content="\n".join(body)), i


def _parse_heading(line: str) -> Heading:
    level = len(line) - len(line.lstrip("#"))
    content = line[level:].lstrip()
    return Heading(level=min(max(level, 1), 6), inlines=tuple(parse_inlines(content)))


def _parse_quote(lines: List[str], index: int) -> tuple[Quote, int]:
    parts: list[str] = []
    i = index
    while i < len(lines):
        line = lines[i].lstrip()
        if not _is_quote(line):
            break
        parts.append(line[1:].lstrip())
        i += 1
    return Quote(inlines=tuple(parse_inlines("\n".join(parts)))), i


def _parse_list(lines: List[str], index: int) -> tuple[ListBlock, int]:
    first = lines[index].strip()
    ordered = _ORDERED_RE.fullmatch(first) is not None
    start_index = _list_number(first) if ordered else 1

    items: list[tuple[Inline, ...]] = []
    i = index
    while i < len(lines):
        line = lines[i].strip()
        if not _is_list(line):
            break
        marker = _MARKER_RE.match(line)
        parts = [line[marker.end() if marker else 0 :].lstrip()]
        i += 1
        while i < len(lines):
            cont = lines[i]
            if not cont.strip():
                break
            if not (cont.startswith("    ") or cont.startswith("\t")):
                break
            parts.append(cont.strip())
            i += 1
        items.append(tuple(parse_inlines("\n".join(parts))))
    return ListBlock(ordered=ordered, items=tuple(items), start_index=start_index), i


def _parse_paragraph(lines: List[str], index: int) -> tuple[Paragraph, int]:
    # The first line is always taken so the scan can never stall on it.
    parts = [lines[index].strip()]
    i = index + 1
    while i < len(lines):
        line = lines[i].strip()
        if not line or _is_boundary(line):
            break
        parts.append(line)
        i += 1
    return Paragraph(inlines=tuple(parse_inlines(" ".join(parts)))), i


def _is_boundary(line: str) -> bool:
    return (
        line.startswith(FENCE)
        or _is_heading(line)
        or _is_quote(line)
        or _is_horizontal_rule(line)
        or _is_list(line)
    )


def _is_heading(line: str) -> bool:
    if not line.startswith("#"):
        return False
    count = len(line) - len(line.lstrip("#"))
    return count < len(line) and line[count].isspace()


def _is_quote(line: str) -> bool:
    return line.startswith(">")


def _is_horizontal_rule(line: str) -> bool:
    return line.replace(" ", "") in {"***", "---", "___"}


def _is_list(line: str) -> bool:
    return _UNORDERED_RE.fullmatch(line) is not None or _ORDERED_RE.fullmatch(line) is not None


def _list_number(line: str) -> int:
    match = _ORDERED_RE.fullmatch(line)
    if not match:
        return 1
    number = int(match.group(1))
    return number if number > 0 else 1


def parse_inlines(text: str, depth: int = 0) -> List[Inline]:
    """Tokenize inline markup, recursing into emphasis and link labels."""
    if depth >= MAX_INLINE_DEPTH:
        return [Text(text)] if text else []

    nodes: List[Inline] = []
    pairs = _match_pairs(text) if "[" in text else {}
    i = 0
    length = len(text)
    while i < length:
        current = text[i]
        if current == "`":
            closing = text.find("`", i + 1)
            if closing > i:
                nodes.append(Code(text[i + 1 : closing]))
                i = closing + 1
                continue
        if current in "*_":
            delimiter = current * 2 if text.startswith(current * 2, i) else current
            closing = text.find(delimiter, i + len(delimiter))
            if closing > i:
                children = tuple(parse_inlines(text[i + len(delimiter) : closing], depth + 1))
                nodes.append(Bold(children) if len(delimiter) == 2 else Italic(children))
                i = closing + len(delimiter)
                continue
        if current == "[":
            link, end = _parse_link(text, i, pairs, depth)
            if link is not None:
                nodes.append(link)
                i = end
                continue
        next_index = _next_special(text, i)
        nodes.append(Text(text[i:next_index]))
        i = next_index
    return _merge_text(nodes)


def _parse_link(text: str, index: int, pairs: dict[int, int], depth: int) -> tuple[Link | None, int]:
    closing_bracket = pairs.get(index, -1)
    if closing_bracket < 0:
        return None, index
    url_start = closing_bracket + 1
    if url_start >= len(text) or text[url_start] != "(":
        return None, index
    closing_paren = pairs.get(url_start, -1)
    if closing_paren < 0:
        return None, index
    label = tuple(parse_inlines(text[index + 1 : closing_bracket], depth + 1))
    return Link(label=label, url=text[url_start + 1 : closing_paren]), closing_paren + 1


def _match_pairs(text: str) -> dict[int, int]:
    """Map every ``[`` and ``(`` to the closer that brings its depth back to zero.

    One pass with a stack per bracket kind; unmatched closers are ignored.
    """
    pairs: dict[int, int] = {}
    stacks: dict[str, list[int]] = {"[": [], "(": []}
    for match in _BRACKET_RE.finditer(text):
        char = match.group()
        pos = match.start()
        if char in stacks:
            stacks[char].append(pos)
            continue
        stack = stacks[_OPENERS[char]]
        if stack:
            pairs[stack.pop()] = pos
    return pairs


def _next_special(text: str, start: int) -> int:
    index = start
    while index < len(text) and text[index] not in _SPECIAL_CHARS:
        index += 1
    return max(index, start + 1)


def _merge_text(nodes: List[Inline]) -> List[Inline]:
    merged: List[Inline] = []
    buffer: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            buffer.append(node.value)
            continue
        if buffer:
            merged.append(Text("".join(buffer)))
            buffer = []
        merged.append(node)
    if buffer:
        merged.append(Text("".join(buffer)))
    return [node for node in merged if not (isinstance(node, Text) and not node.value)]
