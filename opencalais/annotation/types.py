"""Typed annotation outputs and client state records."""

from dataclasses import dataclass, field


@dataclass(slots=True)
class Topic:
    """Topic assigned to the whole document."""

    id: str
    name: str
    score: float


@dataclass(slots=True)
class SocialTag:
    """Folksonomy-style label with an importance rank."""

    id: str
    name: str
    importance: float
    original_value: str = ""


@dataclass(slots=True)
class EntityInstance:
    """One textual occurrence of an entity in the source document."""

    detection: str
    exact: str
    offset: int
    prefix: str = ""
    suffix: str = ""


@dataclass(slots=True)
class Entity:
    """Named entity grouped by type and name."""

    id: str
    name: str
    type: str
    common_name: str = ""
    relevance: float = 0.0
    instances: list[EntityInstance] = field(default_factory=list)
    confidence: dict[str, float] | None = None


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Snapshot of the validated request options."""

    input_content_class: str
    input_content_type: str
    output_format: str
    output_tags: tuple[str, ...]
    omit_original_document: bool


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Single cached response keyed by the sha256 of the request body."""

    document_hash: str
    raw_response: str


@dataclass(frozen=True, slots=True)
class ClientWarning:
    """Non-fatal diagnostic emitted by the client."""

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status line and body returned by a transport."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)
