"""
PPTX Presentation Extractor
===========================

Extracts the text of Microsoft PowerPoint .pptx files (Office Open XML,
PowerPoint 2007 and later) slide by slide, one text block per shape.

This module reads the container directly with ``zipfile`` and ``lxml``,
without python-pptx.

File Format Background
----------------------
The .pptx format is a ZIP archive of XML parts:

    ppt/presentation.xml: Presentation-level properties
    ppt/_rels/presentation.xml.rels: Presentation relationships; slide
        relationships appear in the order the slides are stored
    ppt/slides/slide1.xml, slide2.xml, ...: Individual slide content
    docProps/core.xml: Metadata (title, author, dates)

Extracted Content
-----------------
Per slide (``SlideTextContent``):
    - id: relationship id of the slide (``rId2`` ...)
    - path: part name inside the archive
    - xml / parsed: raw part text and parsed tree
    - text: list of text blocks, one per shape with a text body

Known Limitations
-----------------
- Grouped shapes, tables, charts and SmartArt are not descended into
- Text fields (``a:fld``, e.g. slide numbers) are not extracted
- Speaker notes and comments are not extracted
- Password-protected files are not supported

Usage
-----
    >>> import io
    >>> from pptx2text.extractors.pptx_extractor import read_pptx
    >>>
    >>> with open("slides.pptx", "rb") as f:
    ...     for ppt in read_pptx(io.BytesIO(f.read()), path="slides.pptx"):
    ...         print(f"Title: {ppt.metadata.title}")
    ...         for slide in ppt.slides:
    ...             print(slide.id, slide.text)
"""

import io
import logging
from pathlib import Path
from typing import Any, Generator, List

from pptx2text.extractors.data_types import (
    ParsedPresentation,
    PptxContent,
    PptxMetadata,
    SlideTextContent,
    XmlPart,
)
from pptx2text.extractors.presentation_loader import (
    DEFAULT_LOADER_CONFIG,
    LoaderConfig,
    load_presentation,
    parse,
)
from pptx2text.extractors.slide_text import extract_text_from_slide

logger = logging.getLogger(__name__)

_DC_TITLE = "dc:title"
_DC_CREATOR = "dc:creator"
_DC_SUBJECT = "dc:subject"
_CP_KEYWORDS = "cp:keywords"
_CP_LASTMODIFIEDBY = "cp:lastModifiedBy"
_CP_REVISION = "cp:revision"
_DCTERMS_CREATED = "dcterms:created"
_DCTERMS_MODIFIED = "dcterms:modified"


def extract_text_from_presentation(
    presentation: ParsedPresentation,
) -> List[SlideTextContent]:
    """Run the slide text extraction over every loaded slide, in slide order."""
    return [
        SlideTextContent(
            id=slide.id,
            path=slide.path,
            xml=slide.xml,
            parsed=slide.parsed,
            text=extract_text_from_slide(slide.parsed),
        )
        for slide in presentation.slides
    ]


def extract_text(
    path: str | Path, config: LoaderConfig = DEFAULT_LOADER_CONFIG
) -> List[SlideTextContent]:
    """
    Load a PPTX file and extract the text blocks of each slide.

    Raises:
        ExtractionFailedError: If the presentation cannot be loaded.
    """
    return extract_text_from_presentation(parse(path, config=config))


def _element_text(part: XmlPart, tag: str) -> str:
    elem = part.parsed.find(tag)
    return elem.text if elem is not None else ""


def _extract_metadata(presentation: ParsedPresentation) -> PptxMetadata:
    metadata = PptxMetadata()
    core = presentation.core_properties
    if core is None:
        return metadata

    logger.debug("Extracting metadata")
    metadata.title = _element_text(core, _DC_TITLE)
    metadata.author = _element_text(core, _DC_CREATOR)
    metadata.subject = _element_text(core, _DC_SUBJECT)
    metadata.keywords = _element_text(core, _CP_KEYWORDS)
    metadata.last_modified_by = _element_text(core, _CP_LASTMODIFIEDBY)
    # Remove 'Z' suffix for consistency with the other date fields
    metadata.created = _element_text(core, _DCTERMS_CREATED).rstrip("Z")
    metadata.modified = _element_text(core, _DCTERMS_MODIFIED).rstrip("Z")

    revision = _element_text(core, _CP_REVISION)
    if revision.isdigit():
        metadata.revision = int(revision)

    return metadata


def read_pptx(
    file_like: io.BytesIO,
    path: str | None = None,
    config: LoaderConfig = DEFAULT_LOADER_CONFIG,
) -> Generator[PptxContent, Any, None]:
    """
    Extract all slide text and metadata from a PowerPoint .pptx file.

    Uses a generator for API consistency with other readers, even though a
    PPTX file holds exactly one presentation.

    Args:
        file_like: BytesIO object containing the complete PPTX file data.
        path: Optional filesystem path to the source file. If provided,
            populates file metadata (filename, extension, folder).
        config: Loader options.

    Yields:
        PptxContent: metadata plus one ``SlideTextContent`` per slide whose
        part exists in the archive, in relationship order.

    Raises:
        ExtractionFailedError: If the presentation cannot be loaded.
    """
    logger.debug("Reading pptx")
    presentation = load_presentation(file_like, path, config=config)

    metadata = _extract_metadata(presentation)
    metadata.populate_from_path(path)

    slides = extract_text_from_presentation(presentation)
    logger.info(
        "Extracted PPTX: %d slides, %d text blocks",
        len(slides),
        sum(len(slide.text) for slide in slides),
    )

    yield PptxContent(metadata=metadata, slides=slides)
