import io
import logging
import unittest

import pytest

import pptx2text
from pptx2text.exceptions import ExtractionFailedError
from pptx2text.extractors.data_types import (
    FileMetadataInterface,
    PptxContent,
    SlideTextContent,
)
from pptx2text.extractors.pptx_extractor import (
    extract_text,
    extract_text_from_presentation,
    read_pptx,
)
from pptx2text.extractors.presentation_loader import load_presentation
from pptx2text.tests.pptx_factory import (
    PRESENTATION_XML,
    SLIDE_TYPE,
    make_pptx,
    make_zip_bytesio,
    paragraph,
    relationships_xml,
    run,
    shape_without_text,
    slide_xml,
    text_shape,
)

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def _deck() -> io.BytesIO:
    return make_pptx(
        {
            "ppt/slides/slide1.xml": slide_xml(
                text_shape(paragraph(run("Quarterly Review"), end_marker=True)),
                shape_without_text(),
                text_shape(
                    paragraph(run("Revenue "), run("up")),
                    paragraph(run("Costs"), "<a:br/>"),
                    paragraph(),
                ),
            ),
            "ppt/slides/slide2.xml": slide_xml(shape_without_text()),
            "ppt/slides/slide3.xml": slide_xml(text_shape(paragraph(run("Thanks")))),
        },
        with_core=True,
    )


#############
# Interface #
#############


def test_file_metadata_extraction() -> None:
    meta = FileMetadataInterface()
    meta.populate_from_path("my/dummy/deck.pptx")

    tc.assertEqual("deck.pptx", meta.filename)
    tc.assertEqual(".pptx", meta.file_extension)
    tc.assertEqual("my/dummy/deck.pptx", meta.file_path)
    tc.assertEqual("my/dummy", meta.folder_path)

    tc.assertDictEqual(
        {
            "filename": "deck.pptx",
            "file_extension": ".pptx",
            "file_path": "my/dummy/deck.pptx",
            "folder_path": "my/dummy",
        },
        meta.to_dict(),
    )


########
# PPTX #
########


def test_read_pptx() -> None:
    pptx: PptxContent = next(read_pptx(_deck(), path="my/dummy/deck.pptx"))

    # metadata
    tc.assertEqual("Quarterly Review", pptx.metadata.title)
    tc.assertEqual("Jane Doe", pptx.metadata.author)
    tc.assertEqual("John Roe", pptx.metadata.last_modified_by)
    tc.assertEqual("2024-01-02T03:04:05", pptx.metadata.created)
    tc.assertEqual("", pptx.metadata.modified)
    tc.assertEqual(4, pptx.metadata.revision)
    tc.assertEqual("deck.pptx", pptx.metadata.filename)

    # slides
    tc.assertEqual(3, len(pptx.slides))
    tc.assertEqual(["rId2", "rId3", "rId4"], [slide.id for slide in pptx.slides])

    tc.assertListEqual(
        ["Quarterly Review\n", "Revenue up\nCosts\n\n\n"], pptx.slides[0].text
    )
    tc.assertListEqual([], pptx.slides[1].text)
    tc.assertListEqual(["Thanks"], pptx.slides[2].text)

    # iterator
    tc.assertListEqual(
        ["Quarterly Review\n\nRevenue up\nCosts\n\n\n", "", "Thanks"],
        list(pptx.iterator()),
    )

    # full text skips slides without text
    tc.assertEqual(
        "Quarterly Review\n\nRevenue up\nCosts\n\n\n\n\nThanks", pptx.get_full_text()
    )
    tc.assertIs(pptx.metadata, pptx.get_metadata())


def test_read_pptx_without_core_properties() -> None:
    file_like = make_pptx({"ppt/slides/slide1.xml": slide_xml()})

    pptx: PptxContent = next(read_pptx(file_like))

    tc.assertEqual("", pptx.metadata.title)
    tc.assertIsNone(pptx.metadata.revision)
    tc.assertIsNone(pptx.metadata.filename)
    tc.assertListEqual([], pptx.slides[0].text)


def test_extract_text_keeps_slide_identity(tmp_path) -> None:
    path = tmp_path / "deck.pptx"
    path.write_bytes(_deck().getvalue())

    slides = extract_text(path)

    tc.assertEqual(3, len(slides))
    for slide in slides:
        tc.assertIsInstance(slide, SlideTextContent)
    tc.assertEqual("rId4", slides[2].id)
    tc.assertEqual("ppt/slides/slide3.xml", slides[2].path)
    tc.assertEqual("p:sld", slides[2].parsed.tag)
    tc.assertIn("Thanks", slides[2].xml)
    tc.assertListEqual(["Thanks"], slides[2].text)

    # the package level helper gives the same result
    tc.assertEqual(slides, pptx2text.extract_text(path))


def test_extract_text_follows_loaded_slides_only() -> None:
    relations = [
        ("rId2", SLIDE_TYPE, "slides/slide1.xml"),
        ("rId3", SLIDE_TYPE, "slides/slide2.xml"),
    ]
    file_like = make_pptx(
        {"ppt/slides/slide2.xml": slide_xml(text_shape(paragraph(run("Present"))))},
        relations,
    )

    slides = extract_text_from_presentation(load_presentation(file_like))

    tc.assertEqual(["rId3"], [slide.id for slide in slides])
    tc.assertListEqual(["Present"], slides[0].text)


def test_read_file(tmp_path) -> None:
    path = tmp_path / "deck.pptx"
    path.write_bytes(_deck().getvalue())

    results = list(pptx2text.read_file(path))

    tc.assertEqual(1, len(results))
    tc.assertTrue(hasattr(results[0], "get_metadata"))
    tc.assertTrue(hasattr(results[0], "iterator"))
    tc.assertTrue(hasattr(results[0], "get_full_text"))
    tc.assertEqual(str(path.resolve()), results[0].get_metadata().file_path)


def test_read_file_of_missing_file_is_wrapped(tmp_path) -> None:
    with pytest.raises(ExtractionFailedError) as exc_info:
        next(pptx2text.read_file(tmp_path / "missing.pptx"))

    tc.assertTrue(str(exc_info.value).startswith("Failed to parse PPTX: "))
    tc.assertIsInstance(exc_info.value.__cause__, FileNotFoundError)


def test_read_pptx_ignores_broken_core_properties() -> None:
    file_like = make_zip_bytesio(
        {
            "ppt/presentation.xml": PRESENTATION_XML,
            "ppt/_rels/presentation.xml.rels": relationships_xml(
                [("rId2", SLIDE_TYPE, "slides/slide1.xml")]
            ),
            "ppt/slides/slide1.xml": slide_xml(text_shape(paragraph(run("Kept")))),
            "docProps/core.xml": "<cp:coreProperties",
        }
    )

    pptx: PptxContent = next(read_pptx(file_like))

    tc.assertEqual("", pptx.metadata.title)
    tc.assertEqual("Kept", pptx.get_full_text())
