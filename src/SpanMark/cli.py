from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import renderer_docx, renderer_spans, theme_parser
from .model import StyleConfig
from .utils import configure_logging, read_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="SpanMark",
        description="Render markdown with inline HTML into styled text runs.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file, or - for stdin")
    parser.add_argument("-o", "--output", type=str, help="Output DOCX path")
    parser.add_argument("--theme", type=str, help="YAML file with colors, code font and heading scale")
    parser.add_argument(
        "--format",
        choices=("docx", "json", "text"),
        default="docx",
        help="docx writes a file; json and text print to stdout",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    input_path = None
    if args.input != "-":
        input_path = Path(args.input).expanduser()
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")

    style = StyleConfig()
    if args.theme:
        logging.info("Loading theme %s", args.theme)
        style = theme_parser.load_theme(Path(args.theme).expanduser())

    logging.info("Reading %s", input_path or "stdin")
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Rendering styled text...")
    styled = renderer_spans.render(markdown_text, style)

    if args.format == "json":
        sys.stdout.write(json.dumps(styled.to_dict(), ensure_ascii=False) + "\n")
    elif args.format == "text":
        sys.stdout.write(styled.text + "\n")
    else:
        output_path = resolve_output_path(input_path, args.output)
        logging.info("Rendering DOCX to %s", output_path)
        renderer_docx.render_styled_docx(styled, output_path)
        logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
