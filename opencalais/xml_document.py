"""Serialize a nested field mapping into the XML document the service accepts."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any
from xml.etree import ElementTree

from opencalais.annotation.errors import InvalidArgumentError

_ELEMENT_NAME_RE = re.compile(r"^[A-Za-z_][\w.\-]*$")


def to_xml_document(fields: Mapping[str, Any], root_tag: str = "document") -> str:
    """Return ``fields`` as an XML string wrapped in a single root element.

    Mapping keys become element names. Numeric keys, and keys that are not
    valid element names, get an ``item`` prefix. Nested mappings become child
    elements and lists become repeated ``item<N>`` children.
    """

    if not isinstance(fields, Mapping):
        raise InvalidArgumentError(f"Document fields must be a mapping, not {type(fields).__name__}")
    root = ElementTree.Element(root_tag)
    _append_children(root, fields.items())
    body = ElementTree.tostring(root, encoding="unicode")
    return f'<?xml version="1.0"?>\n{body}\n'


def _append_children(parent: ElementTree.Element, items: Iterable[tuple[Any, Any]]) -> None:
    for key, value in items:
        child = ElementTree.SubElement(parent, _element_name(key))
        if isinstance(value, Mapping):
            _append_children(child, value.items())
        elif isinstance(value, (list, tuple)):
            _append_children(child, enumerate(value))
        elif value is None:
            continue
        else:
            child.text = str(value)


def _element_name(key: object) -> str:
    name = str(key)
    if _ELEMENT_NAME_RE.match(name) and not name.lower().startswith("xml"):
        return name
    cleaned = re.sub(r"[^\w.\-]", "_", name)
    return f"item{cleaned}"
