"""OpenCalais client: request options, single-slot response cache and response normalization."""

from __future__ import annotations

import copy
import hashlib
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from opencalais.annotation.errors import ApiError, InvalidConfigError, ParseError, TransportError
from opencalais.annotation.transport import HttpClient, UrllibHttpClient
from opencalais.annotation.types import (
    CacheEntry,
    ClientConfig,
    ClientWarning,
    Entity,
    EntityInstance,
    HttpResponse,
    SocialTag,
    Topic,
)
from opencalais.schema.options import (
    DEFAULT_DOCUMENT_CHARSET,
    DEFAULT_DOCUMENT_LANGUAGE,
    DEFAULT_INPUT_CONTENT_CLASS,
    DEFAULT_INPUT_CONTENT_TYPE,
    DEFAULT_OMIT_ORIGINAL_DOCUMENT,
    DEFAULT_OUTPUT_FORMAT,
    DOCUMENT_LANGUAGE_VALUES,
    INPUT_CONTENT_CLASS_VALUES,
    INPUT_CONTENT_TYPE_VALUES,
    JSON_OUTPUT_FORMAT,
    OUTPUT_FORMAT_VALUES,
    XML_INPUT_CONTENT_TYPE,
    require_choice,
    split_output_tags,
)
from opencalais.xml_document import to_xml_document

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.thomsonreuters.com/permid/calais"

_TYPE_GROUP_FIELD = "_typeGroup"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class _RawTopic(_WireModel):
    name: str
    score: float


class _RawSocialTag(_WireModel):
    name: str
    importance: float
    original_value: str = Field(default="", alias="originalValue")


class _RawInstance(_WireModel):
    detection: str = ""
    exact: str
    offset: int
    prefix: str = ""
    suffix: str = ""


class _RawEntity(_WireModel):
    name: str
    type: str = Field(alias="_type")
    common_name: str = Field(default="", alias="commonname")
    relevance: float = 0.0
    instances: list[_RawInstance] = Field(default_factory=list)
    confidence: dict[str, float] | None = None


# _typeGroup value -> wire model. Anything else in the response graph is ignored.
_MEMBER_MODELS: dict[str, type[_WireModel]] = {
    "topics": _RawTopic,
    "socialTag": _RawSocialTag,
    "entities": _RawEntity,
}


class AnnotationClient:
    """Client for the OpenCalais annotation REST API.

    Holds the request options, a one-entry response cache keyed by the sha256
    of the submitted document, and the topics, social tags and entities parsed
    from the latest successful JSON response. Not safe for concurrent use.
    """

    def __init__(
        self,
        api_token: str,
        input_content_type: str = DEFAULT_INPUT_CONTENT_TYPE,
        output_format: str = DEFAULT_OUTPUT_FORMAT,
        *,
        http_client: HttpClient | None = None,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        if not api_token:
            raise InvalidConfigError("An OpenCalais API token is required")
        self._api_token = api_token
        self._api_url = api_url
        self._http_client: HttpClient = http_client or UrllibHttpClient()

        self._input_content_class = DEFAULT_INPUT_CONTENT_CLASS
        self._input_content_type = DEFAULT_INPUT_CONTENT_TYPE
        self._output_format = DEFAULT_OUTPUT_FORMAT
        self._output_tags: list[str] = []
        self._omit_original_document = DEFAULT_OMIT_ORIGINAL_DOCUMENT
        self.set_input_content_type(input_content_type)
        self.set_output_format(output_format)

        self._last_document_hash: str | None = None
        self._cache: CacheEntry | None = None
        self._last_api_response: str | None = None
        self._warnings: list[ClientWarning] = []

        self._topics: dict[str, Topic] = {}
        self._social_tags: dict[str, SocialTag] = {}
        self._entities: dict[str, dict[str, Entity]] = {}

    def set_input_content_class(self, input_content_class: str) -> None:
        self._input_content_class = require_choice(
            "input content class", input_content_class, INPUT_CONTENT_CLASS_VALUES
        )

    def set_input_content_type(self, input_content_type: str) -> None:
        self._input_content_type = require_choice(
            "input content type", input_content_type, INPUT_CONTENT_TYPE_VALUES
        )

    def set_output_format(self, output_format: str) -> None:
        self._output_format = require_choice("output format", output_format, OUTPUT_FORMAT_VALUES)

    def set_output_omit_original_document(self, omit: bool) -> None:
        """Ask the service not to echo the submitted text (recommended for large documents)."""

        if not isinstance(omit, bool):
            raise InvalidConfigError(f"Omit original document flag must be a boolean ({omit!r})")
        self._omit_original_document = omit

    def set_output_tags(self, tags: list[str] | tuple[str, ...]) -> None:
        """Replace the selective-tags filter.

        Unsupported tags are dropped with one warning each instead of failing
        the whole call.
        """

        if isinstance(tags, (str, bytes)) or not isinstance(tags, (list, tuple, set, frozenset)):
            raise InvalidConfigError(f"Output tags must be a list of tag names ({tags!r})")
        accepted, rejected = split_output_tags(tags)
        self._output_tags = accepted
        for tag in rejected:
            self._warn("unsupported_output_tag", f"Unsupported output tag ({tag!r}) was dropped")

    @property
    def config(self) -> ClientConfig:
        return ClientConfig(
            input_content_class=self._input_content_class,
            input_content_type=self._input_content_type,
            output_format=self._output_format,
            output_tags=tuple(self._output_tags),
            omit_original_document=self._omit_original_document,
        )

    @property
    def warnings(self) -> tuple[ClientWarning, ...]:
        return tuple(self._warnings)

    @property
    def last_document_hash(self) -> str | None:
        """sha256 of the most recently submitted document, cached or not."""

        return self._last_document_hash

    def query(
        self,
        document: str | Mapping[str, Any],
        language: str = DEFAULT_DOCUMENT_LANGUAGE,
        charset: str = DEFAULT_DOCUMENT_CHARSET,
        force_refresh: bool = False,
    ) -> str:
        """Return the raw API response for ``document``.

        A repeated call with the same document returns the cached body without
        a network round-trip unless ``force_refresh`` is set.
        """

        require_choice("document language", language, DOCUMENT_LANGUAGE_VALUES)
        body = self._encode_document(document, charset)

        document_hash = hashlib.sha256(body).hexdigest()
        if document_hash != self._last_document_hash:
            # Single slot: a new document evicts whatever was cached, even if its own query fails.
            self._cache = None
        self._last_document_hash = document_hash
        if not force_refresh and self._cache is not None and self._cache.document_hash == document_hash:
            logger.debug("opencalais.cache_hit document_hash=%s", document_hash)
            return self._cache.raw_response

        response = self._http_client.post(self._api_url, self._build_headers(language, charset), body)
        raw_response = self._classify_response(response)
        self._cache = CacheEntry(document_hash=document_hash, raw_response=raw_response)
        self._last_api_response = raw_response
        logger.debug(
            "opencalais.query_ok document_hash=%s status=%d bytes=%d",
            document_hash,
            response.status,
            len(raw_response),
        )
        return raw_response

    def extract_data(
        self,
        document: str | Mapping[str, Any],
        language: str = DEFAULT_DOCUMENT_LANGUAGE,
        charset: str = DEFAULT_DOCUMENT_CHARSET,
    ) -> None:
        """Query ``document`` as JSON and replace the topic, social tag and entity collections."""

        force_refresh = False
        if self._output_format != JSON_OUTPUT_FORMAT:
            self._warn(
                "output_format_reset",
                f"Resetting output format from {self._output_format} to {JSON_OUTPUT_FORMAT}",
            )
            self._output_format = JSON_OUTPUT_FORMAT
            # The cached body was fetched in the old format and must not be parsed as JSON.
            self._cache = None
            force_refresh = True

        raw_response = self.query(document, language, charset, force_refresh=force_refresh)
        try:
            decoded = json.loads(raw_response)
        except json.JSONDecodeError as exc:
            raise ParseError("OpenCalais returned a non-JSON response") from exc
        if not isinstance(decoded, dict):
            raise ParseError(f"OpenCalais response is not an object ({type(decoded).__name__})")

        topics: dict[str, Topic] = {}
        social_tags: dict[str, SocialTag] = {}
        entities: dict[str, dict[str, Entity]] = {}

        for key, member in decoded.items():
            parsed = self._decode_member(key, member)
            if isinstance(parsed, _RawTopic):
                topics[parsed.name] = Topic(id=key, name=parsed.name, score=parsed.score)
            elif isinstance(parsed, _RawSocialTag):
                social_tags[parsed.name] = SocialTag(
                    id=key,
                    name=parsed.name,
                    importance=parsed.importance,
                    original_value=parsed.original_value,
                )
            elif isinstance(parsed, _RawEntity):
                by_name = entities.setdefault(parsed.type, {})
                entity = Entity(
                    id=key,
                    name=parsed.name,
                    type=parsed.type,
                    common_name=parsed.common_name,
                    relevance=parsed.relevance,
                    instances=[
                        EntityInstance(
                            detection=instance.detection,
                            exact=instance.exact,
                            offset=instance.offset,
                            prefix=instance.prefix,
                            suffix=instance.suffix,
                        )
                        for instance in parsed.instances
                    ],
                )
                if parsed.confidence is not None:
                    entity.confidence = dict(parsed.confidence)
                by_name[parsed.name] = entity

        self._topics = topics
        self._social_tags = social_tags
        self._entities = entities
        logger.debug(
            "opencalais.extracted topics=%d social_tags=%d entities=%d",
            len(topics),
            len(social_tags),
            sum(len(by_name) for by_name in entities.values()),
        )

    def get_entities(
        self,
        document: str | Mapping[str, Any] | None = None,
        language: str = DEFAULT_DOCUMENT_LANGUAGE,
        charset: str = DEFAULT_DOCUMENT_CHARSET,
    ) -> dict[str, dict[str, Entity]]:
        """Return entities grouped by type then name, extracting ``document`` first if given."""

        if document:
            self.extract_data(document, language, charset)
        return copy.deepcopy(self._entities)

    def get_topics(
        self,
        document: str | Mapping[str, Any] | None = None,
        language: str = DEFAULT_DOCUMENT_LANGUAGE,
        charset: str = DEFAULT_DOCUMENT_CHARSET,
    ) -> dict[str, Topic]:
        if document:
            self.extract_data(document, language, charset)
        return copy.deepcopy(self._topics)

    def get_social_tags(
        self,
        document: str | Mapping[str, Any] | None = None,
        language: str = DEFAULT_DOCUMENT_LANGUAGE,
        charset: str = DEFAULT_DOCUMENT_CHARSET,
    ) -> dict[str, SocialTag]:
        if document:
            self.extract_data(document, language, charset)
        return copy.deepcopy(self._social_tags)

    def get_last_api_response(self) -> str | None:
        """Return the most recent successful raw response body, for archival."""

        return self._last_api_response

    def _encode_document(self, document: str | Mapping[str, Any], charset: str) -> bytes:
        if isinstance(document, Mapping):
            if self._input_content_type != XML_INPUT_CONTENT_TYPE:
                raise InvalidConfigError(
                    f"Structured documents require input content type {XML_INPUT_CONTENT_TYPE} "
                    f"(configured: {self._input_content_type})"
                )
            document = to_xml_document(document)
        try:
            return document.encode(charset)
        except LookupError as exc:
            raise InvalidConfigError(f"Unsupported document charset ({charset!r})") from exc

    def _build_headers(self, language: str, charset: str) -> dict[str, str]:
        headers = {
            "X-AG-Access-Token": self._api_token,
            "Accept-Charset": charset,
            "Content-Type": f"{self._input_content_type}; charset={charset}",
            "outputFormat": self._output_format,
            "x-calais-language": language,
            "x-calais-contentClass": self._input_content_class,
            "omitOutputtingOriginalText": "true" if self._omit_original_document else "false",
        }
        if self._output_tags:
            headers["x-calais-selectiveTags"] = ",".join(self._output_tags)
        return headers

    @staticmethod
    def _classify_response(response: HttpResponse) -> str:
        if 400 <= response.status < 600:
            # Errors come back JSON formatted whatever output format was requested.
            raise ApiError(_fault_message(response), status=response.status)
        if not 200 <= response.status < 300:
            raise ApiError(f"OpenCalais HTTP {response.status}: unexpected status", status=response.status)
        if not response.body:
            raise TransportError(f"OpenCalais returned no data (HTTP {response.status})")
        return response.body

    @staticmethod
    def _decode_member(key: str, member: Any) -> _WireModel | None:
        if not isinstance(member, dict):
            return None
        type_group = member.get(_TYPE_GROUP_FIELD)
        model = _MEMBER_MODELS.get(type_group) if isinstance(type_group, str) else None
        if model is None:
            return None
        try:
            return model.model_validate(member)
        except ValidationError as exc:
            raise ParseError(f"OpenCalais member {key} failed validation: {exc}") from exc

    def _warn(self, code: str, message: str) -> None:
        self._warnings.append(ClientWarning(code=code, message=message))
        logger.warning("opencalais.%s %s", code, message)


def _fault_message(response: HttpResponse) -> str:
    try:
        decoded = json.loads(response.body)
        fault_string = decoded["fault"]["faultstring"]
    except (KeyError, TypeError, json.JSONDecodeError):
        snippet = response.body.strip()[:200]
        return f"OpenCalais HTTP {response.status}: {snippet}" if snippet else f"OpenCalais HTTP {response.status}"
    return str(fault_string)
