"""
pptx-to-text: Text extraction library for PowerPoint Open XML files.

Reads .pptx containers directly (ZIP + XML) and returns, per slide, one text
block for each shape with a text body. Paragraph boundaries and explicit line
breaks are kept as newlines.
"""

import io
from pathlib import Path
from typing import Any, Generator, List

from pptx2text.extractors.data_types import (
    ExtractionInterface,
    ParsedPresentation,
    ParsedSlide,
    PptxContent,
    SlideRelation,
    SlideTextContent,
)
from pptx2text.exceptions import ExtractionFailedError
from pptx2text.extractors.presentation_loader import LoaderConfig
from pptx2text.router import get_extractor, is_supported_file

__version__ = "0.1.0"


def read_pptx(
    file_like: io.BytesIO, path: str | None = None
) -> Generator[PptxContent, Any, None]:
    """Extract content from a PPTX file."""
    from pptx2text.extractors.pptx_extractor import read_pptx as _read_pptx

    return _read_pptx(file_like, path)


def parse(path: str | Path) -> ParsedPresentation:
    """Load the presentation part, relationships part and slides of a PPTX file."""
    from pptx2text.extractors.presentation_loader import parse as _parse

    return _parse(path)


def extract_text(path: str | Path) -> List[SlideTextContent]:
    """Load a PPTX file and return the text blocks of every slide."""
    from pptx2text.extractors.pptx_extractor import extract_text as _extract_text

    return _extract_text(path)


def read_file(
    path: str | Path,
) -> Generator[ExtractionInterface, Any, None]:
    """
    Read and extract content from a presentation file.

    Args:
        path: Path to the file to read.

    Yields:
        PptxContent with metadata and per-slide text blocks.

    Raises:
        ExtractionFileFormatNotSupportedError: If the file is not a
            PresentationML container.
        ExtractionFailedError: If the file cannot be read or the presentation
            cannot be loaded.

    Example:
        >>> import pptx2text
        >>> for result in pptx2text.read_file("slides.pptx"):
        ...     print(result.get_full_text())
    """
    path = Path(path)
    extractor = get_extractor(str(path))
    try:
        with open(path, "rb") as f:
            file_like = io.BytesIO(f.read())
    except OSError as exc:
        raise ExtractionFailedError(f"Failed to parse PPTX: {exc}", cause=exc) from exc
    yield from extractor(file_like, str(path))


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "parse",
    "extract_text",
    "is_supported_file",
    "get_extractor",
    "read_pptx",
    # Types
    "LoaderConfig",
    "ParsedPresentation",
    "ParsedSlide",
    "PptxContent",
    "SlideRelation",
    "SlideTextContent",
]
