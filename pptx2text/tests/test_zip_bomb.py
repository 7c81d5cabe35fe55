import io
import zipfile

import pytest

from pptx2text.exceptions import EntryReadFailureError, ExtractionZipBombError
from pptx2text.extractors.util.zip_bomb import (
    ZipBombLimits,
    open_zipfile,
    validate_zip_bytesio,
)
from pptx2text.extractors.util.zip_context import ArchiveEntry, ZipContext
from pptx2text.tests.pptx_factory import make_zip_bytesio


def test_zip_bomb_detection_can_use_low_thresholds__compression_ratio() -> None:
    buffer = make_zip_bytesio({"ppt/media/blank.bin": b"A" * 10_000})

    with pytest.raises(ExtractionZipBombError):
        validate_zip_bytesio(
            buffer,
            limits=ZipBombLimits(
                max_entry_compression_ratio=10.0,
                max_total_compression_ratio=10.0,
            ),
            source="test",
        )

    validate_zip_bytesio(
        buffer,
        limits=ZipBombLimits(
            max_entry_compression_ratio=10_000.0,
            max_total_compression_ratio=10_000.0,
        ),
        source="test",
    )


def test_zip_bomb_detection_can_use_low_thresholds__entry_count() -> None:
    buffer = make_zip_bytesio({"a.xml": b"a", "b.xml": b"b", "c.xml": b"c"})

    with pytest.raises(ExtractionZipBombError) as exc_info:
        validate_zip_bytesio(buffer, limits=ZipBombLimits(max_entries=2), source="deck")

    assert "[deck]" in str(exc_info.value)


def test_zip_bomb_detection_can_use_low_thresholds__entry_size() -> None:
    buffer = make_zip_bytesio({"ppt/slides/slide1.xml": b"<p:sld/>" * 100})

    with pytest.raises(ExtractionZipBombError):
        open_zipfile(buffer, limits=ZipBombLimits(max_single_uncompressed_bytes=100))


def test_validation_restores_stream_position() -> None:
    buffer = make_zip_bytesio({"a.xml": b"<a/>"})
    buffer.seek(7)

    validate_zip_bytesio(buffer)

    assert buffer.tell() == 7


def test_zip_context_lists_entries_and_reads_them() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("ppt/", b"")
        zf.writestr("ppt/presentation.xml", b"<p/>")
        zf.writestr("[Content_Types].xml", b"<Types/>")

    with ZipContext(buffer, source="deck.pptx") as ctx:
        entries = ctx.entries()

        assert [entry.path for entry in entries] == [
            "ppt/presentation.xml",
            "[Content_Types].xml",
        ]
        assert entries[0].read() == b"<p/>"
        assert ctx.exists("ppt/presentation.xml")
        assert not ctx.exists("ppt/")
        assert ctx.entry("ppt/missing.xml") is None
        assert isinstance(ctx.entry("[Content_Types].xml"), ArchiveEntry)


def test_zip_context_wraps_unreadable_members() -> None:
    buffer = make_zip_bytesio({"ppt/presentation.xml": b"<p/>"})

    with ZipContext(buffer) as ctx:
        with pytest.raises(EntryReadFailureError):
            ctx.read_bytes("ppt/not-there.xml")


def test_zip_context_rejects_non_zip_input() -> None:
    with pytest.raises(EntryReadFailureError):
        ZipContext(io.BytesIO(b"PK but not really"))
