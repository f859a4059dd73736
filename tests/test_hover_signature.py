from SpanMark.hover import MarkedString, MarkupContent, hover_markdown, hover_style, render_hover
from SpanMark.model import Span, StyleKind
from SpanMark.signature import (
    ParameterInformation,
    SignatureHelp,
    SignatureInformation,
    SignatureNavigator,
    parameter_range,
    render_signature,
    signature_label,
)

TEXT = "#111111"
HIGHLIGHT = "#FF0000"


def test_hover_marked_string_becomes_fence():
    assert hover_markdown({"language": "python", "value": "x = 1"}) == "```python\nx = 1\n```"
    assert hover_markdown(MarkedString(language=None, value="plain")) == "plain"


def test_hover_list_and_markup_payloads():
    assert hover_markdown(["plain", {"language": "", "value": "v"}, None]) == "plain\n\nv\n\n"
    assert hover_markdown({"kind": "markdown", "value": "**b**"}) == "**b**"
    assert hover_markdown(MarkupContent(kind="plaintext", value=None)) == ""
    assert hover_markdown({"contents": "text"}) == "text"
    assert hover_markdown(None) == ""


def test_render_hover_uses_scheme_colors():
    style = hover_style(TEXT, HIGHLIGHT, code_font="Menlo")
    assert style.bold_color == HIGHLIGHT and style.link_color == HIGHLIGHT
    styled = render_hover({"contents": {"language": "python", "value": "x = 1"}}, style)
    assert styled.text == "x = 1"
    assert styled.spans == (
        Span(0, 5, StyleKind.TYPEFACE, "Menlo"),
        Span(0, 5, StyleKind.COLOR, TEXT),
    )


def _signature(**extra):
    data = {"label": "foo(a, b)", "parameters": [{"label": "a"}, {"label": "b"}]}
    data.update(extra)
    return SignatureInformation.from_dict(data)


def test_signature_label_highlights_active_parameter():
    styled = signature_label(_signature(), 1, True, TEXT, HIGHLIGHT)
    assert styled.text == "foo(a, b)"
    assert styled.spans == (
        Span(0, 9, StyleKind.COLOR, TEXT),
        Span(7, 8, StyleKind.COLOR, HIGHLIGHT),
        Span(7, 8, StyleKind.BOLD),
        Span(0, 9, StyleKind.BOLD),
    )


def test_signature_label_without_active_parameter():
    styled = signature_label(_signature(), -1, False, TEXT, HIGHLIGHT)
    assert styled.spans == (Span(0, 9, StyleKind.COLOR, TEXT),)
    styled = signature_label(_signature(), 5, False, TEXT, HIGHLIGHT)
    assert styled.spans == (Span(0, 9, StyleKind.COLOR, TEXT),)


def test_parameter_range_lookup():
    assert parameter_range("a(a)", ParameterInformation(label="a")) == (2, 3)
    assert parameter_range("foo(a, b)", ParameterInformation(label=(4, 5))) == (4, 5)
    assert parameter_range("foo()", ParameterInformation(label=(10, 20))) is None
    assert parameter_range("foo()", ParameterInformation(label="missing")) is None
    offsets = ParameterInformation.from_dict({"label": [7, 8]})
    assert offsets.label == (7, 8)


def test_navigator_wraps_and_counts():
    help_ = SignatureHelp.from_dict(
        {
            "signatures": [{"label": "f(x)"}, {"label": "f(x, y)"}, {"label": "f()"}],
            "activeSignature": 5,
        }
    )
    navigator = SignatureNavigator(help_, TEXT, HIGHLIGHT)
    assert navigator.can_navigate
    assert navigator.counter == "3/3"
    assert navigator.next().counter == "1/3"
    assert navigator.previous().counter == "3/3"
    assert navigator.previous().label.text == "f(x, y)"


def test_navigator_marks_only_active_signature_bold():
    help_ = SignatureHelp.from_dict(
        {"signatures": [{"label": "f(x)"}, {"label": "g(y)"}], "activeSignature": 0}
    )
    navigator = SignatureNavigator(help_, TEXT, HIGHLIGHT)
    assert Span(0, 4, StyleKind.BOLD) in navigator.current().label.spans
    assert Span(0, 4, StyleKind.BOLD) not in navigator.next().label.spans


def test_signature_active_parameter_precedence():
    help_ = SignatureHelp.from_dict(
        {
            "signatures": [
                {"label": "foo(a, b)", "parameters": [{"label": "a"}, {"label": "b"}], "activeParameter": 0}
            ],
            "activeParameter": 1,
        }
    )
    view = SignatureNavigator(help_, TEXT, HIGHLIGHT).current()
    assert Span(4, 5, StyleKind.COLOR, HIGHLIGHT) in view.label.spans


def test_render_signature_documentation():
    view = render_signature(
        {
            "signatures": [
                {
                    "label": "bar(n)",
                    "documentation": {"kind": "markdown", "value": "Returns **n**"},
                    "parameters": [{"label": "n"}],
                }
            ],
            "activeParameter": 0,
        },
        TEXT,
        HIGHLIGHT,
    )
    assert view.counter == "1/1"
    assert view.documentation.text == "Returns n"
    assert view.documentation.spans_of(StyleKind.BOLD) == [Span(8, 9, StyleKind.BOLD)]
    assert Span(4, 5, StyleKind.BOLD) in view.label.spans


def test_empty_signature_help():
    navigator = SignatureNavigator(SignatureHelp(), TEXT, HIGHLIGHT)
    assert navigator.counter == "0/0"
    assert not navigator.can_navigate
    assert navigator.current() is None
    assert navigator.next() is None
    assert render_signature({}, TEXT, HIGHLIGHT) is None
