import typing
from abc import abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol

from pptx2text.extractors.util.xml_tree import XmlElement, XmlText

PRESENTATION_PATH = "ppt/presentation.xml"
PRESENTATION_RELS_PATH = "ppt/_rels/presentation.xml.rels"
PRESENTATION_ROOT = "ppt/"
CORE_PROPERTIES_PATH = "docProps/core.xml"


@dataclass
class FileMetadataInterface:
    filename: str | None = None
    file_extension: str | None = None
    file_path: str | None = None
    folder_path: str | None = None

    def populate_from_path(self, path: str | Path | None) -> None:
        """Populate file metadata fields from a path."""
        if path is None:
            return
        p = Path(path)
        self.filename = p.name
        self.file_extension = p.suffix
        self.file_path = str(p.resolve()) if p.exists() else str(p)
        self.folder_path = (
            str(p.parent.resolve()) if p.parent.exists() else str(p.parent)
        )

    def to_dict(self) -> dict:
        return asdict(self)


class ExtractionInterface(Protocol):
    @abstractmethod
    def iterator(self) -> typing.Iterator[str]:
        """
        Returns an iterator over the extracted text, one string per slide.
        Slides without any text body still yield an empty string so that the
        n-th value belongs to the n-th loaded slide.
        """
        ...

    @abstractmethod
    def get_full_text(self) -> str:
        """Full text of the slide deck as one single block of text"""
        ...

    @abstractmethod
    def get_metadata(self) -> FileMetadataInterface:
        """Returns the metadata of the extracted file"""
        ...


###############
# loaded parts
###############


@dataclass(frozen=True)
class SlideRelation:
    id: str
    # relative to the ppt/ folder, e.g. "slides/slide1.xml"
    target: str

    @property
    def part_path(self) -> str:
        return f"{PRESENTATION_ROOT}{self.target}"


@dataclass
class XmlPart:
    path: str
    xml: str
    parsed: XmlElement


@dataclass
class ParsedSlide:
    id: str
    path: str
    xml: str
    parsed: XmlElement


@dataclass
class ParsedPresentation:
    presentation: XmlPart
    relationships: XmlPart
    slides: List[ParsedSlide] = field(default_factory=list)
    # docProps/core.xml, optional in a valid container
    core_properties: Optional[XmlPart] = None


@dataclass
class SlideTextContent(ParsedSlide):
    # one text block per shape with a text body, in shape tree order
    text: List[str] = field(default_factory=list)

    def get_text(self) -> str:
        return "\n".join(self.text)


##############
# extraction
##############


@dataclass
class PptxMetadata(FileMetadataInterface):
    title: str = ""
    subject: str = ""
    author: str = ""
    last_modified_by: str = ""
    created: str = ""
    modified: str = ""
    keywords: str = ""
    revision: Optional[int] = None


@dataclass
class PptxContent(ExtractionInterface):
    metadata: PptxMetadata = field(default_factory=PptxMetadata)
    slides: List[SlideTextContent] = field(default_factory=list)

    def iterator(self) -> typing.Iterator[str]:
        for slide in self.slides:
            yield slide.get_text()

    def get_full_text(self) -> str:
        """All slide texts separated by a blank line."""
        return "\n\n".join(text for text in self.iterator() if text)

    def get_metadata(self) -> PptxMetadata:
        return self.metadata


__all__ = [
    "PRESENTATION_PATH",
    "PRESENTATION_RELS_PATH",
    "PRESENTATION_ROOT",
    "CORE_PROPERTIES_PATH",
    "FileMetadataInterface",
    "ExtractionInterface",
    "SlideRelation",
    "XmlPart",
    "XmlElement",
    "XmlText",
    "ParsedSlide",
    "ParsedPresentation",
    "SlideTextContent",
    "PptxMetadata",
    "PptxContent",
]
