"""Option whitelists for the annotation service."""

from opencalais.schema.options import (
    DOCUMENT_LANGUAGE_VALUES,
    INPUT_CONTENT_CLASS_VALUES,
    INPUT_CONTENT_TYPE_VALUES,
    OUTPUT_FORMAT_VALUES,
    OUTPUT_TAG_VALUES,
    require_choice,
    split_output_tags,
)

__all__ = [
    "DOCUMENT_LANGUAGE_VALUES",
    "INPUT_CONTENT_CLASS_VALUES",
    "INPUT_CONTENT_TYPE_VALUES",
    "OUTPUT_FORMAT_VALUES",
    "OUTPUT_TAG_VALUES",
    "require_choice",
    "split_output_tags",
]
