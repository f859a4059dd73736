from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Union

from .hover import MarkupContent
from .model import Span, StyleConfig, StyledText, StyleKind
from .renderer_spans import render

logger = logging.getLogger(__name__)

ParameterLabel = Union[str, Tuple[int, int]]


@dataclass(frozen=True)
class ParameterInformation:
    label: ParameterLabel
    documentation: str | MarkupContent | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParameterInformation":
        label = data.get("label") or ""
        if isinstance(label, (list, tuple)) and len(label) == 2:
            label = (int(label[0]), int(label[1]))
        elif not isinstance(label, str):
            label = str(label)
        return cls(label=label, documentation=_documentation(data.get("documentation")))


@dataclass(frozen=True)
class SignatureInformation:
    label: str
    documentation: str | MarkupContent | None = None
    parameters: Tuple[ParameterInformation, ...] = ()
    active_parameter: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignatureInformation":
        parameters = tuple(ParameterInformation.from_dict(p) for p in data.get("parameters") or [])
        return cls(
            label=str(data.get("label") or ""),
            documentation=_documentation(data.get("documentation")),
            parameters=parameters,
            active_parameter=data.get("activeParameter"),
        )


@dataclass(frozen=True)
class SignatureHelp:
    signatures: Tuple[SignatureInformation, ...] = ()
    active_signature: int | None = None
    active_parameter: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignatureHelp":
        signatures = tuple(SignatureInformation.from_dict(s) for s in data.get("signatures") or [])
        return cls(
            signatures=signatures,
            active_signature=data.get("activeSignature"),
            active_parameter=data.get("activeParameter"),
        )


@dataclass(frozen=True)
class SignatureView:
    label: StyledText
    documentation: StyledText
    counter: str


def _documentation(value: Any) -> str | MarkupContent | None:
    if isinstance(value, Mapping):
        return MarkupContent(kind=str(value.get("kind") or "plaintext"), value=value.get("value"))
    return value


def documentation_text(documentation: str | MarkupContent | None) -> str:
    if documentation is None:
        return ""
    if isinstance(documentation, MarkupContent):
        return documentation.value or ""
    return documentation


def parameter_range(signature_label: str, parameter: ParameterInformation) -> tuple[int, int] | None:
    """Locate a parameter inside its signature label.

    Offset pairs are clamped to the label. String labels are searched for
    after the opening parenthesis so a parameter sharing the function name
    still resolves to the argument list.
    """
    label = parameter.label
    if isinstance(label, tuple):
        start = min(max(label[0], 0), len(signature_label))
        end = min(max(label[1], start), len(signature_label))
        return (start, end) if end > start else None
    if not label:
        return None
    paren = signature_label.find("(")
    found = signature_label.find(label, paren + 1 if paren >= 0 else 0)
    if found < 0:
        found = signature_label.find(label)
    if found < 0:
        return None
    return found, found + len(label)


def signature_label(
    signature: SignatureInformation,
    active_parameter: int,
    is_active: bool,
    text_color: str,
    highlight_color: str,
) -> StyledText:
    text = signature.label
    spans = [Span(0, len(text), StyleKind.COLOR, text_color)]
    if 0 <= active_parameter < len(signature.parameters):
        found = parameter_range(text, signature.parameters[active_parameter])
        if found is not None:
            start, end = found
            spans.append(Span(start, end, StyleKind.COLOR, highlight_color))
            spans.append(Span(start, end, StyleKind.BOLD))
        else:
            logger.debug("Parameter %d not found in %r", active_parameter, text)
    if is_active:
        spans.append(Span(0, len(text), StyleKind.BOLD))
    return StyledText(text=text, spans=tuple(spans))


@dataclass
class SignatureNavigator:
    """Tracks which of several signatures is on display."""

    signature_help: SignatureHelp
    text_color: str
    highlight_color: str
    style: StyleConfig = field(default_factory=StyleConfig)
    index: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        count = len(self.signature_help.signatures)
        active = self.signature_help.active_signature or 0
        self.index = min(max(active, 0), count - 1) if count else 0

    @property
    def can_navigate(self) -> bool:
        return len(self.signature_help.signatures) > 1

    @property
    def counter(self) -> str:
        count = len(self.signature_help.signatures)
        if not count:
            return "0/0"
        return f"{self.index + 1}/{count}"

    def next(self) -> SignatureView | None:
        if self.signature_help.signatures:
            self.index = (self.index + 1) % len(self.signature_help.signatures)
        return self.current()

    def previous(self) -> SignatureView | None:
        if self.signature_help.signatures:
            self.index = (self.index - 1) % len(self.signature_help.signatures)
        return self.current()

    def current(self) -> SignatureView | None:
        if not self.signature_help.signatures:
            return None
        signature = self.signature_help.signatures[self.index]
        active_parameter = signature.active_parameter
        if active_parameter is None:
            active_parameter = self.signature_help.active_parameter
        if active_parameter is None:
            active_parameter = -1
        is_active = self.index == (self.signature_help.active_signature or 0)
        label = signature_label(signature, active_parameter, is_active, self.text_color, self.highlight_color)
        documentation = render(documentation_text(signature.documentation), self.style)
        return SignatureView(label=label, documentation=documentation, counter=self.counter)


def render_signature(
    signature_help: SignatureHelp | Mapping[str, Any],
    text_color: str,
    highlight_color: str,
    style: StyleConfig | None = None,
) -> SignatureView | None:
    if isinstance(signature_help, Mapping):
        signature_help = SignatureHelp.from_dict(signature_help)
    navigator = SignatureNavigator(signature_help, text_color, highlight_color, style or StyleConfig())
    return navigator.current()
