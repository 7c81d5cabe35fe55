from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass

from pptx2text.exceptions import ExtractionZipBombError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs before any presentation part
    is decompressed.

    Slide decks with large embedded media are common, so the limits are
    generous and only catch extreme containers.
    """

    max_entries: int = 20_000
    max_total_uncompressed_bytes: int = 2 * 1024 * 1024 * 1024  # 2 GiB
    max_single_uncompressed_bytes: int = 1 * 1024 * 1024 * 1024  # 1 GiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _reject(message: str, source: str | None) -> ExtractionZipBombError:
    if source:
        message = f"{message} [{source}]"
    return ExtractionZipBombError(message)


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Check the central directory of an open container against ``limits``.

    Only the declared sizes are inspected, nothing is decompressed. This is a
    best-effort DoS mitigation, not a sandbox.
    """
    try:
        infos = zf.infolist()
    except Exception as exc:
        raise ExtractionZipBombError(
            "Failed to inspect ZIP container", cause=exc
        ) from exc

    if len(infos) > limits.max_entries:
        raise _reject(
            f"ZIP container has too many entries ({len(infos)} > {limits.max_entries})",
            source,
        )

    total_uncompressed = 0
    total_compressed = 0

    for info in infos:
        if info.is_dir():
            continue

        if info.file_size > limits.max_single_uncompressed_bytes:
            raise _reject(
                f"ZIP entry {info.filename} too large "
                f"({info.file_size} bytes > {limits.max_single_uncompressed_bytes})",
                source,
            )

        if info.file_size > 0:
            if info.compress_size <= 0:
                raise _reject(
                    f"ZIP entry {info.filename} declares content but no compressed data",
                    source,
                )
            ratio = info.file_size / info.compress_size
            if ratio > limits.max_entry_compression_ratio:
                raise _reject(
                    f"ZIP entry {info.filename} compression ratio too high "
                    f"({ratio:.1f} > {limits.max_entry_compression_ratio})",
                    source,
                )

        total_uncompressed += info.file_size
        total_compressed += info.compress_size

        if total_uncompressed > limits.max_total_uncompressed_bytes:
            raise _reject(
                f"ZIP total uncompressed size too large "
                f"({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})",
                source,
            )

    if total_uncompressed == 0:
        return
    if total_compressed <= 0:
        raise _reject(
            "ZIP container declares content but no compressed data", source
        )
    total_ratio = total_uncompressed / total_compressed
    if total_ratio > limits.max_total_compression_ratio:
        raise _reject(
            f"ZIP total compression ratio too high "
            f"({total_ratio:.1f} > {limits.max_total_compression_ratio})",
            source,
        )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a container read-only and validate it. The caller closes the result.
    """
    file_like.seek(0)
    zf = zipfile.ZipFile(file_like, "r")
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf


def validate_zip_bytesio(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """Validate an in-memory container and restore the stream position."""
    original_pos = file_like.tell()
    try:
        file_like.seek(0)
        with zipfile.ZipFile(file_like, "r") as zf:
            validate_zipfile(zf, limits=limits, source=source)
    finally:
        file_like.seek(original_pos)
