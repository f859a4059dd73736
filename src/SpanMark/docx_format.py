from __future__ import annotations

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Cm, Pt, RGBColor

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297

FONT_NAME = "Calibri"
FONT_SIZE_PT = 11
LINE_SPACING_PT = 14

MARGIN_CM = 2.0


def apply_page_layout(doc) -> None:
    """Apply A4 page setup with even margins."""
    section = doc.sections[0]
    section.page_height = Cm(A4_HEIGHT_MM / 10)
    section.page_width = Cm(A4_WIDTH_MM / 10)
    section.left_margin = Cm(MARGIN_CM)
    section.right_margin = Cm(MARGIN_CM)
    section.top_margin = Cm(MARGIN_CM)
    section.bottom_margin = Cm(MARGIN_CM)


def apply_paragraph_format(paragraph, margin: tuple[int, int] | None = None) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_after = Pt(0)
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.line_spacing = Pt(LINE_SPACING_PT)
    if margin is not None:
        first, rest = margin
        # Hanging indent: continuation lines sit at ``rest``, the first line at ``first``.
        paragraph.paragraph_format.left_indent = Pt(rest)
        paragraph.paragraph_format.first_line_indent = Pt(first - rest)


def set_run_font(
    run,
    bold: bool = False,
    italic: bool = False,
    font_name: str | None = None,
    scale: float = 1.0,
    color: str | None = None,
    underline: bool = False,
) -> None:
    run.font.name = font_name or FONT_NAME
    run.font.size = Pt(FONT_SIZE_PT * scale)
    run.bold = bold
    run.italic = italic
    run.font.underline = underline
    if color:
        run.font.color.rgb = RGBColor.from_string(color.lstrip("#").upper())
