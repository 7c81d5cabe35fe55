"""
Presentation Loader
===================

Opens a PPTX container and returns its presentation part, its relationships
part and every slide part referenced by a slide relationship, each with raw
XML text and parsed tree.

Slide parts are read and parsed on a thread pool. Results are collected per
relation index, so the slide list always follows the order of the
relationships part no matter which slide finishes first. A relation whose
target is not in the archive is dropped, and an unreadable optional
``docProps/core.xml`` is ignored; any other failure aborts the load.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pptx2text.exceptions import (
    EntryReadFailureError,
    ExtractionError,
    ExtractionFailedError,
    InvalidContainerStructureError,
    XmlParseFailureError,
)
from pptx2text.extractors.data_types import (
    CORE_PROPERTIES_PATH,
    PRESENTATION_PATH,
    PRESENTATION_RELS_PATH,
    ParsedPresentation,
    ParsedSlide,
    SlideRelation,
    XmlPart,
)
from pptx2text.extractors.relationships import resolve_slide_relations
from pptx2text.extractors.util.xml_tree import (
    DEFAULT_XML_PARSER_CONFIG,
    XmlParserConfig,
    decode_xml,
    parse_xml,
)
from pptx2text.extractors.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from pptx2text.extractors.util.zip_context import ArchiveEntry, ZipContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoaderConfig:
    # None lets ThreadPoolExecutor pick its default worker count
    max_workers: Optional[int] = None
    xml: XmlParserConfig = field(default_factory=lambda: DEFAULT_XML_PARSER_CONFIG)
    zip_limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS


DEFAULT_LOADER_CONFIG = LoaderConfig()


def _read_part(entry: ArchiveEntry, config: XmlParserConfig) -> XmlPart:
    data = entry.read()
    return XmlPart(
        path=entry.path,
        xml=decode_xml(data, source=entry.path),
        parsed=parse_xml(data, config=config, source=entry.path),
    )


def _require_entry(ctx: ZipContext, path: str) -> ArchiveEntry:
    entry = ctx.entry(path)
    if entry is None:
        raise InvalidContainerStructureError(path)
    return entry


def _load_slide(
    ctx: ZipContext, relation: SlideRelation, config: XmlParserConfig
) -> ParsedSlide | None:
    entry = ctx.entry(relation.part_path)
    if entry is None:
        logger.debug(
            f"Dropping slide relation {relation.id}: "
            f"[{relation.part_path}] is not in the archive"
        )
        return None

    part = _read_part(entry, config)
    return ParsedSlide(id=relation.id, path=part.path, xml=part.xml, parsed=part.parsed)


def _load_core_properties(
    ctx: ZipContext, config: XmlParserConfig
) -> XmlPart | None:
    entry = ctx.entry(CORE_PROPERTIES_PATH)
    if entry is None:
        return None
    try:
        return _read_part(entry, config)
    except (EntryReadFailureError, XmlParseFailureError) as exc:
        # optional part
        logger.debug(f"Ignoring unreadable [{CORE_PROPERTIES_PATH}]: {exc}")
        return None


def _load_from_context(ctx: ZipContext, config: LoaderConfig) -> ParsedPresentation:
    presentation_entry = _require_entry(ctx, PRESENTATION_PATH)
    relationships_entry = _require_entry(ctx, PRESENTATION_RELS_PATH)

    presentation = _read_part(presentation_entry, config.xml)
    relationships = _read_part(relationships_entry, config.xml)

    relations = resolve_slide_relations(relationships.parsed)
    core_properties = _load_core_properties(ctx, config.xml)

    if relations:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            # map() yields results in submission order, i.e. relation order
            loaded = list(
                executor.map(
                    lambda relation: _load_slide(ctx, relation, config.xml),
                    relations,
                )
            )
    else:
        loaded = []

    slides: List[ParsedSlide] = [slide for slide in loaded if slide is not None]

    logger.info(
        "Loaded PPTX: %d slides (%d slide relations)",
        len(slides),
        len(relations),
    )
    return ParsedPresentation(
        presentation=presentation,
        relationships=relationships,
        slides=slides,
        core_properties=core_properties,
    )


def load_presentation(
    file_like: io.BytesIO,
    path: str | None = None,
    config: LoaderConfig = DEFAULT_LOADER_CONFIG,
) -> ParsedPresentation:
    """
    Load all presentation-level parts and slides of an in-memory PPTX file.

    Args:
        file_like: BytesIO holding the complete container. The stream position
            is reset before reading.
        path: Optional source path, used in log and error messages only.
        config: Worker count, XML parser options and ZIP-bomb limits.

    Returns:
        ParsedPresentation with slides in relationship order.

    Raises:
        ExtractionFailedError: For every fatal condition. The specific
            subclasses InvalidContainerStructureError,
            MalformedRelationshipsError, XmlParseFailureError,
            EntryReadFailureError and ExtractionZipBombError are raised as is;
            anything unexpected is wrapped.
    """
    logger.debug(f"Loading pptx [{path}]")
    try:
        with ZipContext(file_like, limits=config.zip_limits, source=path) as ctx:
            return _load_from_context(ctx, config)
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionFailedError(f"Failed to parse PPTX: {exc}", cause=exc) from exc


def parse(
    path: str | Path, config: LoaderConfig = DEFAULT_LOADER_CONFIG
) -> ParsedPresentation:
    """Load a PPTX file from the filesystem. See ``load_presentation``."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            file_like = io.BytesIO(f.read())
    except OSError as exc:
        raise ExtractionFailedError(f"Failed to parse PPTX: {exc}", cause=exc) from exc
    return load_presentation(file_like, str(path), config=config)
