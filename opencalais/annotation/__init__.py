"""Annotation client package."""

from opencalais.annotation.client import DEFAULT_API_URL, AnnotationClient
from opencalais.annotation.errors import (
    AnnotationError,
    ApiError,
    InvalidArgumentError,
    InvalidConfigError,
    ParseError,
    TransportError,
)
from opencalais.annotation.transport import HttpClient, UrllibHttpClient
from opencalais.annotation.types import (
    ClientConfig,
    ClientWarning,
    Entity,
    EntityInstance,
    HttpResponse,
    SocialTag,
    Topic,
)

__all__ = [
    "DEFAULT_API_URL",
    "AnnotationClient",
    "AnnotationError",
    "ApiError",
    "ClientConfig",
    "ClientWarning",
    "Entity",
    "EntityInstance",
    "HttpClient",
    "HttpResponse",
    "InvalidArgumentError",
    "InvalidConfigError",
    "ParseError",
    "SocialTag",
    "Topic",
    "TransportError",
    "UrllibHttpClient",
]
