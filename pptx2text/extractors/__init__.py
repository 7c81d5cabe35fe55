"""
PowerPoint Open XML extractor package.

    presentation_loader: opens the container and parses presentation,
        relationships and slide parts
    relationships: picks the slide relationships out of the presentation
        relationships part
    slide_text: turns one parsed slide into text blocks
    pptx_extractor: ``read_pptx`` / ``extract_text`` on top of the above
"""

from pptx2text.extractors.pptx_extractor import extract_text, read_pptx

__all__ = [
    "extract_text",
    "read_pptx",
]
