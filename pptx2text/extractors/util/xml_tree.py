"""
Order-preserving XML trees for presentation parts.

Parts are parsed with lxml and converted into a small tree of plain
dataclasses: ``XmlElement`` for elements and ``XmlText`` for character data.
Element and attribute names use canonical prefixes for the Office Open XML
namespaces (``p:sld``, ``a:t``, ``r:id``) no matter which prefixes the
producing application declared, and the package relationships namespace maps
to unprefixed names (``Relationships``).

All lookups return ``None`` or an empty list for missing structure so callers
can treat absence as "nothing to contribute".
"""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Union

from lxml import etree

from pptx2text.exceptions import XmlParseFailureError

logger = logging.getLogger(__name__)

P_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CP_NS = "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# Empty string means "no prefix"
CANONICAL_PREFIXES: Mapping[str, str] = {
    P_NS: "p",
    A_NS: "a",
    R_NS: "r",
    REL_NS: "",
    CP_NS: "cp",
    DC_NS: "dc",
    DCTERMS_NS: "dcterms",
    XML_NS: "xml",
}

_ENCODING_DECL = re.compile(rb"""^<\?xml[^>]*encoding=["']([A-Za-z0-9._-]+)["']""")


@dataclass(frozen=True)
class XmlParserConfig:
    """Options handed to lxml for every part that is parsed."""

    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False
    remove_comments: bool = True
    remove_pis: bool = True
    # Whitespace-only text between sibling elements is indentation, not content.
    # Whitespace that is the only content of an element (``<a:t> </a:t>``) is kept.
    drop_whitespace_between_elements: bool = True
    canonical_prefixes: Mapping[str, str] = field(
        default_factory=lambda: dict(CANONICAL_PREFIXES)
    )

    def build_parser(self, encoding: str | None = None) -> etree.XMLParser:
        # lxml parsers must not be shared between threads, so build one per call
        return etree.XMLParser(
            encoding=encoding,
            resolve_entities=self.resolve_entities,
            no_network=self.no_network,
            huge_tree=self.huge_tree,
            remove_comments=self.remove_comments,
            remove_pis=self.remove_pis,
        )


DEFAULT_XML_PARSER_CONFIG = XmlParserConfig()


@dataclass(frozen=True)
class XmlText:
    value: str


@dataclass
class XmlElement:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: List[Union["XmlElement", XmlText]] = field(default_factory=list)

    def elements(self) -> Iterator[XmlElement]:
        """Child elements in document order, text leaves skipped."""
        for child in self.children:
            if isinstance(child, XmlElement):
                yield child

    def findall(self, tag: str) -> list[XmlElement]:
        return [child for child in self.elements() if child.tag == tag]

    def find(self, tag: str) -> XmlElement | None:
        return next((child for child in self.elements() if child.tag == tag), None)

    def has(self, tag: str) -> bool:
        return self.find(tag) is not None

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)

    @property
    def text(self) -> str:
        """Concatenated direct text leaves; empty for an element without any."""
        return "".join(
            child.value for child in self.children if isinstance(child, XmlText)
        )


def _qualified_name(name: str, prefixes: Mapping[str, str], nsmap: dict) -> str:
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    prefix = prefixes.get(qname.namespace)
    if prefix is None:
        # Unknown namespace: keep whatever prefix the document declared
        prefix = next(
            (p for p, uri in nsmap.items() if uri == qname.namespace and p), ""
        )
    return f"{prefix}:{qname.localname}" if prefix else qname.localname


def _convert(node: etree._Element, config: XmlParserConfig) -> XmlElement:
    prefixes = config.canonical_prefixes
    element = XmlElement(
        tag=_qualified_name(node.tag, prefixes, node.nsmap),
        attrs={
            _qualified_name(name, prefixes, node.nsmap): value
            for name, value in node.attrib.items()
        },
    )

    leaves: List[Union[XmlElement, XmlText]] = []
    if node.text is not None:
        leaves.append(XmlText(node.text))
    for child in node:
        # Comments and processing instructions only matter for their tail text
        if isinstance(child.tag, str):
            leaves.append(_convert(child, config))
        if child.tail is not None:
            leaves.append(XmlText(child.tail))

    has_elements = any(isinstance(leaf, XmlElement) for leaf in leaves)
    if has_elements and config.drop_whitespace_between_elements:
        leaves = [
            leaf
            for leaf in leaves
            if not (isinstance(leaf, XmlText) and not leaf.value.strip())
        ]
    element.children = leaves
    return element


def parse_xml(
    content: str | bytes,
    *,
    config: XmlParserConfig = DEFAULT_XML_PARSER_CONFIG,
    source: str | None = None,
) -> XmlElement:
    """
    Parse an XML document into an ``XmlElement`` tree.

    Args:
        content: The document as text or as raw bytes. Bytes are decoded by
            lxml according to the XML declaration.
        config: Parser options.
        source: Part name used in error messages.

    Raises:
        XmlParseFailureError: If lxml rejects the document.
    """
    if isinstance(content, str):
        # lxml refuses str input that carries an encoding declaration
        content = content.encode("utf-8")
        parser = config.build_parser(encoding="utf-8")
    else:
        parser = config.build_parser()

    try:
        root = etree.fromstring(content, parser)
    except etree.XMLSyntaxError as exc:
        raise XmlParseFailureError(source, f"Invalid XML: {exc}", cause=exc) from exc

    logger.debug(f"Parsed XML root <{root.tag}> from [{source}]")
    return _convert(root, config)


def decode_xml(data: bytes, source: str | None = None) -> str:
    """
    Decode the raw bytes of a part into text.

    A byte order mark wins over the XML declaration; without either the part
    is read as UTF-8, the Office Open XML default.
    """
    for bom, encoding in (
        (codecs.BOM_UTF8, "utf-8-sig"),
        (codecs.BOM_UTF16_LE, "utf-16"),
        (codecs.BOM_UTF16_BE, "utf-16"),
    ):
        if data.startswith(bom):
            break
    else:
        match = _ENCODING_DECL.match(data[:200])
        encoding = match.group(1).decode("ascii") if match else "utf-8"

    try:
        return data.decode(encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise XmlParseFailureError(
            source, f"Cannot decode part as {encoding}: {exc}", cause=exc
        ) from exc
