class ExtractionError(Exception):
    """Base class for all errors raised while extracting a presentation."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class ExtractionFailedError(ExtractionError):
    """Raised when a presentation cannot be loaded. Every fatal load error is one."""


class InvalidContainerStructureError(ExtractionFailedError):
    """Raised when a required top-level part is missing from the container."""

    def __init__(self, missing_path: str, message: str = None, *, cause=None):
        self.missing_path = missing_path
        if message is None:
            message = f"Invalid PPTX file structure: missing [{missing_path}]"
        super().__init__(message, cause=cause)


class MalformedRelationshipsError(ExtractionFailedError):
    """Raised when the presentation relationships part has an unexpected shape."""


class XmlParseFailureError(ExtractionFailedError):
    """Raised when a part is not well-formed XML."""

    def __init__(self, part_path: str | None, message: str, *, cause=None):
        self.part_path = part_path
        if part_path:
            message = f"{message} [{part_path}]"
        super().__init__(message, cause=cause)


class EntryReadFailureError(ExtractionFailedError):
    """Raised when an archive member cannot be read."""


class ExtractionZipBombError(ExtractionFailedError):
    """Raised when a ZIP container looks like a decompression bomb."""


class ExtractionFileFormatNotSupportedError(ExtractionError):
    """Raised when the file format for extraction is not supported."""

    def __init__(self, file_path: str, message: str = None, *, cause=None):
        self.file_path = file_path
        if message is None:
            message = f"Extraction file format not supported: {file_path}"
        super().__init__(message, cause=cause)
