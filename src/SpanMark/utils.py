from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path | None, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            stem = input_path.stem if input_path else "stdin"
            out_path = out_path / f"{stem}.docx"
        return out_path
    if input_path is None:
        return Path("stdin.docx")
    return input_path.with_suffix(".docx")


def read_markdown(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")
