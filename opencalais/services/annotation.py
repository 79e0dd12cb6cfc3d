"""Annotation orchestration helpers."""

from collections.abc import Mapping
from dataclasses import asdict
import logging
from time import perf_counter
from typing import Any

from opencalais.annotation.client import AnnotationClient
from opencalais.annotation.errors import InvalidConfigError
from opencalais.annotation.transport import UrllibHttpClient
from opencalais.config import get_settings
from opencalais.schemas.annotation import DocumentAnnotations

logger = logging.getLogger(__name__)


def get_default_client() -> AnnotationClient:
    """Return a client configured from settings."""

    settings = get_settings()
    if not settings.opencalais_api_token:
        raise InvalidConfigError(
            "OPENCALAIS_API_TOKEN is not configured. Set it in .env before running annotation."
        )
    client = AnnotationClient(
        settings.opencalais_api_token,
        settings.opencalais_input_content_type,
        settings.opencalais_output_format,
        http_client=UrllibHttpClient(timeout_seconds=settings.opencalais_timeout_seconds),
        api_url=settings.opencalais_api_url,
    )
    client.set_input_content_class(settings.opencalais_input_content_class)
    client.set_output_omit_original_document(settings.opencalais_omit_original_document)
    return client


def annotate_document(
    document: str | Mapping[str, Any],
    *,
    client: AnnotationClient | None = None,
    language: str | None = None,
    charset: str | None = None,
) -> DocumentAnnotations:
    """Annotate a document and return its topics, social tags and entities."""

    total_started = perf_counter()
    settings = get_settings()
    active_language = language or settings.opencalais_language
    active_charset = charset or settings.opencalais_charset
    try:
        active_client = client or get_default_client()
        active_client.extract_data(document, active_language, active_charset)

        topics = active_client.get_topics()
        social_tags = active_client.get_social_tags()
        entities = active_client.get_entities()
        result = DocumentAnnotations(
            topics={name: asdict(topic) for name, topic in topics.items()},
            social_tags={name: asdict(tag) for name, tag in social_tags.items()},
            entities={
                entity_type: {name: asdict(entity) for name, entity in by_name.items()}
                for entity_type, by_name in entities.items()
            },
            topic_count=len(topics),
            social_tag_count=len(social_tags),
            entity_count=sum(len(by_name) for by_name in entities.values()),
        )
        logger.info(
            "opencalais.annotation_timing language=%s total_ms=%.2f topics=%d social_tags=%d entities=%d",
            active_language,
            (perf_counter() - total_started) * 1000.0,
            result.topic_count,
            result.social_tag_count,
            result.entity_count,
        )
        return result
    except Exception:
        logger.exception(
            "opencalais.annotation_failed language=%s elapsed_ms=%.2f",
            active_language,
            (perf_counter() - total_started) * 1000.0,
        )
        raise
