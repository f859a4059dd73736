import textwrap

import pytest

from SpanMark import theme_parser
from SpanMark.model import DEFAULT_HEADING_SCALE, StyleConfig


def test_parse_theme_overrides_defaults():
    theme = theme_parser.parse_theme(
        textwrap.dedent(
            """
            bold_color: "#ff0000"
            link_color: "#00aa00"
            code_font: Menlo
            heading_scale: [2, 1.5]
            leading_margin: 10
            unknown_key: ignored
            """
        )
    )
    assert theme.bold_color == "#FF0000"
    assert theme.link_color == "#00AA00"
    assert theme.code_font == "Menlo"
    assert theme.heading_scale == (2.0, 1.5)
    assert theme.leading_margin == 10
    assert theme.inline_code_color == StyleConfig().inline_code_color
    assert theme.scale_for(6) == 1.5


def test_empty_theme_uses_defaults():
    assert theme_parser.parse_theme("") == StyleConfig()
    assert StyleConfig().heading_scale == DEFAULT_HEADING_SCALE


@pytest.mark.parametrize(
    "text",
    [
        "- not\n- a mapping\n",
        "bold_color: red\n",
        "heading_scale: []\n",
        "heading_scale: [big]\n",
        "indent_margin: wide\n",
    ],
)
def test_invalid_theme_raises(text):
    with pytest.raises(ValueError):
        theme_parser.parse_theme(text)


def test_load_theme_from_file(tmp_path):
    path = tmp_path / "theme.yaml"
    path.write_text('block_code_color: "#101010"\n', encoding="utf-8")
    assert theme_parser.load_theme(path).block_code_color == "#101010"
