"""HTTP transport used to reach the annotation service."""

from __future__ import annotations

import http.client
import logging
from dataclasses import dataclass
from typing import Protocol
from urllib import error as urllib_error
from urllib import request as urllib_request

from opencalais.annotation.errors import TransportError
from opencalais.annotation.types import HttpResponse

logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    """Protocol for pluggable HTTP transports.

    Implementations return error statuses (4xx/5xx) as ordinary responses and
    raise ``TransportError`` only when no response was obtained at all.
    """

    def post(self, url: str, headers: dict[str, str], body: bytes) -> HttpResponse:
        """POST ``body`` to ``url`` and return the raw response."""


@dataclass(slots=True)
class UrllibHttpClient:
    """Minimal HTTP transport using stdlib urllib."""

    timeout_seconds: int = 60

    def post(self, url: str, headers: dict[str, str], body: bytes) -> HttpResponse:
        req = urllib_request.Request(url=url, data=body, method="POST", headers=headers)
        try:
            with urllib_request.urlopen(req, timeout=self.timeout_seconds) as resp:
                charset = resp.headers.get_content_charset() or "utf-8"
                return HttpResponse(
                    status=int(resp.status),
                    body=resp.read().decode(charset, errors="replace"),
                    headers=dict(resp.headers.items()),
                )
        except urllib_error.HTTPError as exc:
            # urllib raises on 4xx/5xx; hand them back as responses for the caller to classify.
            try:
                detail = exc.read().decode("utf-8", errors="replace")
                headers_out = dict(exc.headers.items()) if exc.headers is not None else {}
            finally:
                exc.close()
            logger.debug("opencalais.http_error_status url=%s status=%d", url, exc.code)
            return HttpResponse(status=int(exc.code), body=detail, headers=headers_out)
        except urllib_error.URLError as exc:
            raise TransportError(f"OpenCalais request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise TransportError(f"OpenCalais request timed out after {self.timeout_seconds}s") from exc
        except (http.client.HTTPException, OSError) as exc:
            raise TransportError(f"OpenCalais connection failed: {exc!r}") from exc
