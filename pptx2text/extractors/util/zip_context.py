import io
import logging
import zipfile
import zlib
from dataclasses import dataclass

from pptx2text.exceptions import EntryReadFailureError
from pptx2text.extractors.util.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    open_zipfile,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """A named member of an open container."""

    path: str
    context: "ZipContext"

    def read(self) -> bytes:
        return self.context.read_bytes(self.path)


class ZipContext:
    """Read-only view of a PPTX container with validated, independent member reads."""

    def __init__(
        self,
        file_like: io.BytesIO,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
        source: str | None = None,
    ):
        self.file_like = file_like
        self.source = source or type(self).__name__
        try:
            self._zip = open_zipfile(self.file_like, limits=limits, source=self.source)
        except zipfile.BadZipFile as exc:
            raise EntryReadFailureError(
                f"Not a ZIP container: {exc}", cause=exc
            ) from exc
        self._namelist = [
            info.filename for info in self._zip.infolist() if not info.is_dir()
        ]
        self._names = set(self._namelist)

    @property
    def namelist(self) -> list[str]:
        return self._namelist

    def entries(self) -> list[ArchiveEntry]:
        return [ArchiveEntry(path=name, context=self) for name in self._namelist]

    def exists(self, path: str) -> bool:
        return path in self._names

    def entry(self, path: str) -> ArchiveEntry | None:
        if not self.exists(path):
            return None
        return ArchiveEntry(path=path, context=self)

    def read_bytes(self, path: str) -> bytes:
        """
        Read one member completely.

        Every call opens its own member stream, so reads may run on several
        threads at once.
        """
        logger.debug(f"Reading [{path}] from [{self.source}]")
        try:
            with self._zip.open(path) as stream:
                return stream.read()
        except (KeyError, OSError, EOFError, zipfile.BadZipFile, zlib.error) as exc:
            raise EntryReadFailureError(
                f"Failed to read [{path}]: {exc}", cause=exc
            ) from exc

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
