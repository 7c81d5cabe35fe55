"""
Slide discovery from the presentation relationships part.

``ppt/_rels/presentation.xml.rels`` lists every part the presentation refers
to (slides, masters, theme, properties ...). A record is a slide when its
``Type`` URI ends with ``/slide``; ``/slideMaster`` and ``/slideLayout`` do
not match. Records are returned in the order they appear in the part.
"""

import logging
from typing import List

from pptx2text.exceptions import MalformedRelationshipsError
from pptx2text.extractors.data_types import SlideRelation
from pptx2text.extractors.util.xml_tree import XmlElement

logger = logging.getLogger(__name__)

RELATIONSHIPS_TAG = "Relationships"
RELATIONSHIP_TAG = "Relationship"
SLIDE_TYPE_SUFFIX = "/slide"


def resolve_slide_relations(relationships_doc: XmlElement | None) -> List[SlideRelation]:
    """
    Return the slide relations of a parsed relationships part in document order.

    Raises:
        MalformedRelationshipsError: If the root is not a ``Relationships``
            element with at least one ``Relationship`` record, if a record
            has no ``Type``, or if a slide record lacks ``Id`` or ``Target``.
    """
    if relationships_doc is None or relationships_doc.tag != RELATIONSHIPS_TAG:
        found = None if relationships_doc is None else relationships_doc.tag
        raise MalformedRelationshipsError(
            f"Expected <{RELATIONSHIPS_TAG}> root in relationships part, found <{found}>"
        )

    records = relationships_doc.findall(RELATIONSHIP_TAG)
    if not records:
        raise MalformedRelationshipsError(
            f"Relationships part has no <{RELATIONSHIP_TAG}> records"
        )

    relations: List[SlideRelation] = []
    for index, record in enumerate(records):
        rel_type = record.get("Type")
        if rel_type is None:
            raise MalformedRelationshipsError(
                f"Relationship record #{index} has no Type attribute"
            )
        if not rel_type.endswith(SLIDE_TYPE_SUFFIX):
            continue

        rel_id = record.get("Id")
        target = record.get("Target")
        if rel_id is None or target is None:
            raise MalformedRelationshipsError(
                f"Slide relationship record #{index} needs both Id and Target"
            )
        relations.append(SlideRelation(id=rel_id, target=target))

    logger.debug(f"Resolved {len(relations)} slide relations of {len(records)} records")
    return relations
