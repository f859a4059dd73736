"""Rewrite the supported HTML subset into markdown before block parsing.

This is a convenience translation, not a sanitizer: anything the patterns
below do not recognise is left in the text verbatim.
"""

from __future__ import annotations

import re

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_HEADING_RE = re.compile(r"<h([1-6])[^>]*>(.*?)</h\1>", re.IGNORECASE | re.DOTALL)
_BLOCKQUOTE_RE = re.compile(r"<blockquote[^>]*>(.*?)</blockquote>", re.IGNORECASE | re.DOTALL)
_STRONG_RE = re.compile(r"<strong[^>]*>(.*?)</strong>", re.IGNORECASE | re.DOTALL)
_EM_RE = re.compile(r"<em[^>]*>(.*?)</em>", re.IGNORECASE | re.DOTALL)
_CODE_RE = re.compile(r"<code[^>]*>(.*?)</code>", re.IGNORECASE | re.DOTALL)
_PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", re.IGNORECASE | re.DOTALL)
_LI_RE = re.compile(r"<li[^>]*>(.*?)</li>", re.IGNORECASE | re.DOTALL)
_LIST_TAG_RE = re.compile(r"</?(?:ul|ol)\b[^>]*>", re.IGNORECASE)
_LINK_RE = re.compile(
    r"<a[^>]+href\s*=\s*['\"]([^'\"]+)['\"][^>]*>(.*?)</a>",
    re.IGNORECASE | re.DOTALL,
)
_P_OPEN_RE = re.compile(r"<p\b[^>]*>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"</p>", re.IGNORECASE)
_MULTI_NEWLINE_RE = re.compile(r"\n{3,}")

# Order matters: "&amp;" must be decoded last so "&amp;lt;" yields "&lt;".
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def normalize(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _BR_RE.sub("\n", text)
    text = _HEADING_RE.sub(lambda m: "#" * int(m.group(1)) + " " + m.group(2).strip(), text)
    text = _BLOCKQUOTE_RE.sub(lambda m: "> " + m.group(1).strip(), text)
    text = _STRONG_RE.sub(r"**\1**", text)
    text = _EM_RE.sub(r"*\1*", text)
    text = _CODE_RE.sub(r"`\1`", text)
    text = _PRE_RE.sub(lambda m: f"```\n{m.group(1)}\n```", text)
    text = _LI_RE.sub(lambda m: "- " + m.group(1).strip(), text)
    text = _LIST_TAG_RE.sub("", text)
    text = _LINK_RE.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", text)
    text = _P_OPEN_RE.sub("", text)
    text = _P_CLOSE_RE.sub("\n\n", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    text = _MULTI_NEWLINE_RE.sub("\n\n", text)
    return text.strip()
