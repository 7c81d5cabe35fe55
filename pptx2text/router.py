import io
import logging
import mimetypes
import os
from typing import Any, Callable, Generator

from pptx2text.exceptions import ExtractionFileFormatNotSupportedError
from pptx2text.extractors.data_types import ExtractionInterface

logger = logging.getLogger(__name__)

# PresentationML containers share the ppt/ part layout
mime_type_mapping = {
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.ms-powerpoint.presentation.macroEnabled.12": "pptm",
    "application/vnd.openxmlformats-officedocument.presentationml.slideshow": "ppsx",
    "application/vnd.openxmlformats-officedocument.presentationml.template": "potx",
}

# mimetypes does not know every PresentationML extension on every platform
extension_mapping = {
    ".pptx": "pptx",
    ".pptm": "pptm",
    ".ppsx": "ppsx",
    ".potx": "potx",
}


def _detect_file_type(path: str) -> str | None:
    path = path.lower()
    mime_type, _ = mimetypes.guess_type(path)
    if mime_type is not None and mime_type in mime_type_mapping:
        file_type = mime_type_mapping[mime_type]
        logger.debug(
            f"Detected file type: {file_type} (MIME: {mime_type}) for file: {path}"
        )
        return file_type

    _, extension = os.path.splitext(path)
    file_type = extension_mapping.get(extension)
    if file_type is not None:
        logger.debug(f"Detected file type: {file_type} for file: {path}")
    else:
        logger.debug(f"File [{path}] with mime type [{mime_type}] is not supported")
    return file_type


def is_supported_file(path: str) -> bool:
    """Checks if the path is a supported file"""
    return _detect_file_type(path) is not None


def get_extractor(
    path: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Analyses the path of a file and returns a suited extractor.
       The file does not need to exist. The path or filename alone suffices.

    :returns a function of an extractor taking a file-like object as parameter
    :raises ExtractionFileFormatNotSupportedError: File is not a presentation
    """
    if _detect_file_type(path) is None:
        raise ExtractionFileFormatNotSupportedError(path)

    from pptx2text.extractors.pptx_extractor import read_pptx

    return read_pptx
