"""
Generic element-tree codec for the wire-format schemas.

A schema is an ``XmlModel`` whose field aliases name where each value lives
on the wire:

- ``"title"``: text of the first direct child element named ``title``
- ``"author/name"``: text of a nested child path
- ``"@href"``: an attribute of the element itself
- a nested ``XmlModel`` field: a child element decoded with that model
- a ``List[XmlModel]`` field: every direct child with that name, in order

Elements are matched by local name, so a document decodes the same whether
or not it declares a default namespace. The root element name and its static
attributes (version, namespace declarations) are declared on the schema, so
serialized documents come out with their conventional root tag.

Documents are read with lxml and written with ElementTree, which takes
prefixed root names and ``xmlns`` attributes literally.
"""

import re
import typing
from typing import ClassVar, Dict, Optional, Type, TypeVar
from xml.etree import ElementTree as ET

from lxml import etree
from pydantic import BaseModel, ConfigDict

from .rules import OUTPUT_ENCODING

M = TypeVar("M", bound="XmlModel")

# Characters outside the XML 1.0 Char production.
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class SerializationError(ValueError):
    """Raised when a schema structure cannot be written as XML."""


class XmlModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    xml_tag: ClassVar[str] = ""
    xml_attributes: ClassVar[Dict[str, str]] = {}

    @classmethod
    def xml_rank(cls, element) -> int:
        """Preference among sibling candidates; lowest wins, ties keep document order."""
        return 0


def local_name(tag: str) -> str:
    if tag[:1] == "{":
        return tag.rsplit("}", 1)[1]
    # Prefixed names whose namespace the parser did not resolve.
    return tag.rsplit(":", 1)[-1]


# No recovery: a truncated document must fail rather than decode partially.
# libxml2 still accepts prefixes the document never declares (``<rdf:RDF>``
# alone, a stray ``<dc:creator>``) and leaves them as ``prefix:name`` tags.
_XML_PARSER = etree.XMLParser(
    ns_clean=True,
    recover=False,
    collect_ids=False,
    resolve_entities=False,
)


def fromstring(raw: bytes):
    """Parse a document; raises ``lxml.etree.XMLSyntaxError``."""
    return etree.fromstring(raw, parser=_XML_PARSER)


def _children(element, name: str):
    # Comments and processing instructions have non-string tags.
    return [
        child for child in element
        if isinstance(child.tag, str) and local_name(child.tag) == name
    ]


def _text(element) -> str:
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            parts.append(_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _find(element, path: str):
    for name in path.split("/"):
        matches = _children(element, name)
        if not matches:
            return None
        element = matches[0]
    return element


def _model_type(annotation):
    if isinstance(annotation, type) and issubclass(annotation, XmlModel):
        return annotation
    return None


def _list_model_type(annotation):
    if typing.get_origin(annotation) is list:
        (arg,) = typing.get_args(annotation)
        return _model_type(arg)
    return None


def unmarshal(cls: Type[M], element) -> M:
    values = {}
    for name, info in cls.model_fields.items():
        path = info.alias or name
        annotation = info.annotation

        if path.startswith("@"):
            values[name] = element.get(path[1:], "")
        elif _list_model_type(annotation) is not None:
            sub = _list_model_type(annotation)
            values[name] = [unmarshal(sub, child) for child in _children(element, path)]
        elif _model_type(annotation) is not None:
            sub = _model_type(annotation)
            candidates = _children(element, path)
            if candidates:
                best = min(candidates, key=sub.xml_rank)
                values[name] = unmarshal(sub, best)
            else:
                values[name] = sub()
        else:
            found = _find(element, path)
            values[name] = _text(found) if found is not None else ""

    return cls(**values)


def _check_text(path: str, text: str) -> str:
    match = _ILLEGAL_XML_CHARS.search(text)
    if match:
        raise SerializationError(
            f"{path}: character {match.group()!r} at offset {match.start()} is not allowed in XML"
        )
    return text


def marshal(model: XmlModel, tag: Optional[str] = None) -> ET.Element:
    cls = type(model)
    element = ET.Element(tag or cls.xml_tag)
    if tag is None:
        for key, value in cls.xml_attributes.items():
            element.set(key, value)

    for name, info in cls.model_fields.items():
        path = info.alias or name
        value = getattr(model, name)

        if path.startswith("@"):
            element.set(path[1:], _check_text(path, value))
        elif _list_model_type(info.annotation) is not None:
            for sub in value:
                element.append(marshal(sub, tag=path))
        elif _model_type(info.annotation) is not None:
            element.append(marshal(value, tag=path))
        else:
            parent = element
            for part in path.split("/"):
                parent = ET.SubElement(parent, part)
            parent.text = _check_text(path, value)

    return element


def tostring(model: XmlModel) -> bytes:
    """Serialize a schema structure to a UTF-8 document with an XML declaration."""
    root = marshal(model)
    try:
        return ET.tostring(root, encoding=OUTPUT_ENCODING, xml_declaration=True)
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e
