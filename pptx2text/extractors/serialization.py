import typing
from dataclasses import fields, is_dataclass

# Type marker key used for serialization
_TYPE_KEY = "_type"

# Fields holding raw part text or parsed trees
_XML_FIELDS = frozenset({"xml", "parsed"})


def _serialize_for_json(value: typing.Any, include_xml: bool) -> typing.Any:
    if is_dataclass(value) and not isinstance(value, type):
        result = {
            _TYPE_KEY: type(value).__name__,
        }
        for item in fields(value):
            if item.name in _XML_FIELDS and not include_xml:
                result[item.name] = None
                continue
            result[item.name] = _serialize_for_json(
                getattr(value, item.name), include_xml
            )
        return result
    if isinstance(value, dict):
        return {
            str(key): _serialize_for_json(val, include_xml)
            for key, val in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [_serialize_for_json(item, include_xml) for item in value]
    return value


def serialize_extraction(value: typing.Any, *, include_xml: bool = False) -> dict:
    """
    Convert an extraction result into JSON-compatible dictionaries.

    Dataclasses carry their class name under ``_type``. Raw XML text and
    parsed trees are replaced by ``None`` unless ``include_xml`` is set; with
    it, trees become nested ``XmlElement``/``XmlText`` dictionaries.
    """
    serialized = _serialize_for_json(value, include_xml)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}
