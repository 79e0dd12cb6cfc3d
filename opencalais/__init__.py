"""OpenCalais annotation client."""

from opencalais.annotation import (
    AnnotationClient,
    AnnotationError,
    ApiError,
    InvalidArgumentError,
    InvalidConfigError,
    ParseError,
    TransportError,
)
from opencalais.xml_document import to_xml_document

__all__ = [
    "AnnotationClient",
    "AnnotationError",
    "ApiError",
    "InvalidArgumentError",
    "InvalidConfigError",
    "ParseError",
    "TransportError",
    "to_xml_document",
]
