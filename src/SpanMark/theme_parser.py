from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .model import StyleConfig

_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")
_COLOR_KEYS = ("bold_color", "inline_code_color", "block_code_color", "link_color")
_MARGIN_KEYS = ("leading_margin", "indent_margin")


def parse_theme(text: str) -> StyleConfig:
    """Parse a YAML theme mapping into a StyleConfig, keeping defaults for absent keys."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Theme YAML root must be a mapping of style fields.")

    values: dict[str, Any] = {}
    for key in _COLOR_KEYS:
        if data.get(key) is not None:
            values[key] = _color(key, data[key])
    if data.get("code_font"):
        values["code_font"] = str(data["code_font"])
    if "heading_scale" in data:
        values["heading_scale"] = _heading_scale(data["heading_scale"])
    for key in _MARGIN_KEYS:
        if data.get(key) is not None:
            values[key] = _margin(key, data[key])
    return StyleConfig(**values)


def load_theme(path: str | Path) -> StyleConfig:
    return parse_theme(Path(path).read_text(encoding="utf-8"))


def _color(key: str, value: Any) -> str:
    color = str(value).strip()
    if not _COLOR_RE.fullmatch(color):
        raise ValueError(f"{key} must be a #RRGGBB color, got {value!r}.")
    return color.upper()


def _heading_scale(value: Any) -> tuple[float, ...]:
    if not isinstance(value, (list, tuple)) or not value:
        raise ValueError("heading_scale must be a non-empty list of numbers.")
    try:
        return tuple(float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"heading_scale entries must be numbers: {value!r}") from exc


def _margin(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}.") from exc
