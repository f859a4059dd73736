from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from docx import Document as DocxDocument

from . import docx_format
from .model import Span, StyledText, StyleKind

logger = logging.getLogger(__name__)


def render_styled_docx(styled: StyledText, output_path: str | Path) -> None:
    """Write styled text to a DOCX file, one Word paragraph per buffer line."""
    output_path = Path(output_path)
    docx = DocxDocument()
    docx_format.apply_page_layout(docx)

    offset = 0
    for line in styled.text.split("\n"):
        _render_line(docx, styled.spans, offset, offset + len(line), line)
        offset += len(line) + 1

    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)
    logger.debug("Wrote %d spans to %s", len(styled.spans), output_path)


def _render_line(docx: DocxDocument, spans: Iterable[Span], start: int, end: int, line: str) -> None:
    touching = [span for span in spans if span.start < end and span.end > start and span.end > span.start]
    margin = None
    for span in touching:
        if span.kind == StyleKind.LEADING_MARGIN:
            margin = span.value
    paragraph = docx.add_paragraph()
    docx_format.apply_paragraph_format(paragraph, margin=margin)

    for seg_start, seg_end in _segments(touching, start, end):
        active = [span for span in touching if span.start <= seg_start and span.end >= seg_end]
        run = paragraph.add_run(line[seg_start - start : seg_end - start])
        _apply_spans(run, active)


def _segments(spans: list[Span], start: int, end: int) -> list[tuple[int, int]]:
    cuts = {start, end}
    for span in spans:
        cuts.update(pos for pos in (span.start, span.end) if start < pos < end)
    ordered = sorted(cuts)
    return [(a, b) for a, b in zip(ordered, ordered[1:]) if b > a]


def _apply_spans(run, spans: list[Span]) -> None:
    bold = italic = underline = False
    font_name = None
    color = None
    scale = 1.0
    # Later spans layer over earlier ones, so the last color wins.
    for span in spans:
        if span.kind == StyleKind.BOLD:
            bold = True
        elif span.kind == StyleKind.ITALIC:
            italic = True
        elif span.kind == StyleKind.TYPEFACE:
            font_name = span.value
        elif span.kind == StyleKind.COLOR:
            color = span.value
        elif span.kind == StyleKind.RELATIVE_SIZE:
            scale = float(span.value)
        elif span.kind == StyleKind.URL:
            underline = True
    docx_format.set_run_font(
        run,
        bold=bold,
        italic=italic,
        font_name=font_name,
        scale=scale,
        color=color,
        underline=underline,
    )
