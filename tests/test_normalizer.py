from SpanMark.normalizer import normalize


def test_html_subset_becomes_markdown():
    assert normalize("<strong>Hi</strong> <a href='u'>L</a>") == "**Hi** [L](u)"


def test_line_endings_and_breaks():
    assert normalize("a\r\nb\rc") == "a\nb\nc"
    assert normalize("line<br>next<BR/>end") == "line\nnext\nend"


def test_headings_require_matching_level():
    assert normalize("<h2> Title </h2>") == "## Title"
    assert normalize("<H3 class='x'>Multi\nline</H3>") == "### Multi\nline"
    assert normalize("<h1>a</h2>") == "<h1>a</h2>"


def test_blockquote_and_inline_tags():
    assert normalize("<blockquote>\n quoted \n</blockquote>") == "> quoted"
    assert normalize("<em>x</em> <code>y</code>") == "*x* `y`"
    assert normalize("<pre>a\n  b</pre>") == "```\na\n  b\n```"


def test_lists_are_flattened():
    html = "<ul>\n<li> one </li>\n<li>two</li>\n</ul>"
    assert normalize(html) == "- one\n- two"
    nested = "<ol><li>outer</li><ul>\n<li>inner</li></ul></ol>"
    assert normalize(nested) == "- outer\n- inner"


def test_paragraph_tags():
    assert normalize("<p>First</p><p class='x'>Second</p>") == "First\n\nSecond"


def test_entities_decode_once():
    assert normalize("a&nbsp;b &lt;c&gt; &amp;amp;") == "a b <c> &amp;"


def test_blank_lines_collapse_and_trim():
    assert normalize("\n\n  a\n\n\n\nb  \n\n") == "a\n\nb"


def test_malformed_html_is_left_alone():
    assert normalize("<strong>open") == "<strong>open"
    assert normalize("<a>no href</a>") == "<a>no href</a>"


def test_normalize_is_idempotent_on_markdown():
    samples = [
        "# Title\n\nSome **bold** and *italic* text.",
        "- a\n- b\n\n> quote",
        "```js\nconsole.log(1)\n```",
        normalize("<p>One</p><p>Two<br>three</p>"),
    ]
    for sample in samples:
        assert normalize(normalize(sample)) == normalize(sample)
