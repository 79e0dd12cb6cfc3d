"""Controlled option values accepted by the OpenCalais service."""

from __future__ import annotations

from collections.abc import Iterable

from opencalais.annotation.errors import InvalidConfigError

INPUT_CONTENT_CLASS_VALUES: tuple[str, ...] = (
    "news",
    "research",
)

INPUT_CONTENT_TYPE_VALUES: tuple[str, ...] = (
    "text/html",
    "text/xml",
    "text/raw",
    "application/pdf",
)

OUTPUT_FORMAT_VALUES: tuple[str, ...] = (
    "xml/rdf",
    "application/json",
    "text/n3",
)

DOCUMENT_LANGUAGE_VALUES: tuple[str, ...] = (
    "English",
    "French",
    "Spanish",
)

# Values of the x-calais-selectiveTags header. An empty selection means all tags.
OUTPUT_TAG_VALUES: tuple[str, ...] = (
    "additionalcontactdetails",
    "company",
    "country",
    "deal",
    "industry",
    "person",
    "socialtags",
    "topic",
)
OUTPUT_TAG_SET = set(OUTPUT_TAG_VALUES)

DEFAULT_INPUT_CONTENT_CLASS = "news"
DEFAULT_INPUT_CONTENT_TYPE = "text/raw"
DEFAULT_OUTPUT_FORMAT = "application/json"
DEFAULT_DOCUMENT_LANGUAGE = "English"
DEFAULT_DOCUMENT_CHARSET = "utf-8"
DEFAULT_OMIT_ORIGINAL_DOCUMENT = True

JSON_OUTPUT_FORMAT = "application/json"
XML_INPUT_CONTENT_TYPE = "text/xml"


def require_choice(kind: str, value: object, allowed: tuple[str, ...]) -> str:
    """Return ``value`` if it is one of ``allowed``, else raise InvalidConfigError."""

    if not isinstance(value, str) or value not in allowed:
        raise InvalidConfigError(f"Unsupported {kind} ({value!r}); expected one of: {', '.join(allowed)}")
    return value


def split_output_tags(tags: Iterable[object]) -> tuple[list[str], list[object]]:
    """Partition requested tags into supported (deduplicated) and rejected ones."""

    accepted: list[str] = []
    rejected: list[object] = []
    for tag in tags:
        if isinstance(tag, str) and tag in OUTPUT_TAG_SET:
            if tag not in accepted:
                accepted.append(tag)
        else:
            rejected.append(tag)
    return accepted, rejected
