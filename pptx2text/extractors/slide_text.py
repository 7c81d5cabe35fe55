"""
Slide Text Extraction
=====================

Turns the parsed tree of one slide part (``ppt/slides/slideN.xml``) into one
text block per shape, keeping paragraph boundaries and explicit line breaks.

Slide XML structure used here::

    p:sld
      p:cSld
        p:spTree
          p:sp            shape, in z-order (the order shapes were added)
            p:txBody      text body; pictures and empty placeholders have none
              a:p         paragraph
                a:r       text run
                  a:t     run text
                a:br      explicit line break (Shift+Enter)
                a:endParaRPr   end-of-paragraph run properties

Paragraph rules
---------------
- Run texts are concatenated in run order.
- A paragraph with any ``a:br`` gets one ``"\\n"`` after all of its run text,
  regardless of where the breaks sit between the runs.
- A paragraph without run text, or with an ``a:endParaRPr`` marker, gets one
  more ``"\\n"``. Blank paragraphs and paragraph terminators therefore produce
  the same token. PowerPoint writes ``a:endParaRPr`` on most paragraphs, so a
  body of several terminated paragraphs yields blank-line separated output.
- Paragraph strings of one text body are joined with ``"\\n"``.

Nothing is trimmed, sorted or de-duplicated. Missing structure at any level
contributes nothing instead of raising.
"""

import logging
from typing import List

from pptx2text.extractors.util.xml_tree import XmlElement

logger = logging.getLogger(__name__)

P_SLD = "p:sld"
P_CSLD = "p:cSld"
P_SPTREE = "p:spTree"
P_SP = "p:sp"
P_TXBODY = "p:txBody"

A_P = "a:p"
A_R = "a:r"
A_T = "a:t"
A_BR = "a:br"
A_ENDPARARPR = "a:endParaRPr"

NEWLINE = "\n"


def _find_shape_tree(slide_root: XmlElement | None) -> XmlElement | None:
    if slide_root is None or slide_root.tag != P_SLD:
        return None
    c_sld = slide_root.find(P_CSLD)
    if c_sld is None:
        return None
    return c_sld.find(P_SPTREE)


def _paragraph_tokens(paragraph: XmlElement) -> List[str]:
    tokens: List[str] = []

    for run in paragraph.findall(A_R):
        run_text = run.find(A_T)
        if run_text is not None:
            tokens.append(run_text.text)

    if paragraph.has(A_BR):
        tokens.append(NEWLINE)

    if not tokens or paragraph.has(A_ENDPARARPR):
        tokens.append(NEWLINE)

    return tokens


def extract_text_from_text_body(text_body: XmlElement) -> str | None:
    """
    Join the paragraphs of one ``p:txBody`` into a text block.

    Returns ``None`` when the body has no paragraph at all.
    """
    paragraph_texts: List[str] = []
    for paragraph in text_body.findall(A_P):
        tokens = _paragraph_tokens(paragraph)
        if tokens:
            paragraph_texts.append("".join(tokens))

    if not paragraph_texts:
        return None
    return NEWLINE.join(paragraph_texts)


def extract_text_from_slide(slide_root: XmlElement | None) -> List[str]:
    """
    Extract the text blocks of one slide in shape tree order.

    Args:
        slide_root: The parsed ``p:sld`` root of a slide part.

    Returns:
        One string per text body found on the slide's top-level shapes. An
        empty list for a slide without shapes or without any text body.
    """
    sp_tree = _find_shape_tree(slide_root)
    if sp_tree is None:
        logger.debug("Slide has no p:cSld/p:spTree, no text extracted")
        return []

    texts: List[str] = []
    for shape in sp_tree.findall(P_SP):
        for text_body in shape.findall(P_TXBODY):
            block = extract_text_from_text_body(text_body)
            if block is not None:
                texts.append(block)

    return texts
