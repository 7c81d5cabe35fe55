from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import pptx2text
from pptx2text.extractors.data_types import ExtractionInterface, PptxContent
from pptx2text.extractors.serialization import serialize_extraction


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptx2text",
        description="Extract slide text from a PPTX file and emit it to stdout (or JSON with --json).",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the presentation to extract.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit structured JSON instead of plain full text (omits raw XML by default).",
    )
    parser.add_argument(
        "--xml",
        action="store_true",
        help="With --json, include raw part XML and parsed trees.",
    )
    parser.add_argument(
        "--slides",
        action="store_true",
        help="Print each slide under its own header (slide number, relationship id, part path).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )
    return parser


def _serialize_results(
    results: list[ExtractionInterface], *, include_xml: bool
) -> dict | list[dict]:
    if len(results) == 1:
        return serialize_extraction(results[0], include_xml=include_xml)
    return [serialize_extraction(result, include_xml=include_xml) for result in results]


def _serialize_full_text(results: list[ExtractionInterface]) -> str:
    return "\n\n".join(result.get_full_text().rstrip() for result in results).rstrip()


def _serialize_slides(results: list[PptxContent]) -> str:
    sections = []
    for result in results:
        for number, slide in enumerate(result.slides, start=1):
            header = f"--- slide {number} [{slide.id}] {slide.path} ---"
            text = slide.get_text().rstrip()
            sections.append(f"{header}\n{text}" if text else header)
    return "\n\n".join(sections)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"pptx2text: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.xml and not args.json:
            raise ValueError("--xml requires --json")
        if args.slides and args.json:
            raise ValueError("--slides cannot be combined with --json")
        results = list(pptx2text.read_file(args.path))
        if not results:
            raise RuntimeError(f"No extraction results for {args.path}")
        if args.json:
            payload = _serialize_results(results, include_xml=bool(args.xml))
            json.dump(payload, sys.stdout)
            sys.stdout.write("\n")
        elif args.slides:
            sys.stdout.write(_serialize_slides(results))
            sys.stdout.write("\n")
        else:
            sys.stdout.write(_serialize_full_text(results))
            sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"pptx2text: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
