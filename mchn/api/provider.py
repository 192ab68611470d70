"""API provider: signs, sends and decodes requests to the MCHN API.

An ``ApiProvider`` owns the session-scoped state of a client: API version,
credential, the last response and the pagination cursor. Each call to
``execute`` returns a new ``ApiResponse`` that belongs to the caller; the
provider only keeps a reference to the most recent one so that the next page
can be fetched.

Calls on one provider are serialised by a lock. Use one provider per thread
for concurrent traffic.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from typing import Any, Iterator, Optional, Tuple
from urllib.parse import urlsplit

import requests
from typing_extensions import Self

from .._core._models import NO_PAGES, ApiResponse, PaginationState, RequestSpec
from .._core._request import RequestConfig, prepare_url, request
from ..auth.credentials import Credential
from ..config import DEFAULT_PROVIDER_NAME, DEFAULT_VERSION, Settings
from ..exceptions import MalformedResponse
from ..signing import is_empty_body
from .pagination import PaginationCursor, pagination_from_payload

logger = logging.getLogger(__name__)

SESSION_HEADER = "x-session-id"
MAX_JSON_DEPTH = 512


def _json_depth(value: Any) -> int:
    """Nesting depth of containers in a decoded JSON value (scalars are 0)."""
    depth = 0
    stack = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children)
    return depth


def decode_body(
    raw: str, endpoint: str, max_depth: int = MAX_JSON_DEPTH
) -> Tuple[Any, Optional[MalformedResponse]]:
    """Decode a response body.

    Returns:
        ``(payload, None)`` on success, ``(None, MalformedResponse)`` otherwise.
    """
    try:
        payload = json.loads(raw)
    except RecursionError:
        return None, MalformedResponse(MalformedResponse.DEPTH, endpoint)
    except json.JSONDecodeError as exc:
        if exc.msg.startswith("Invalid control character"):
            reason = MalformedResponse.CONTROL_CHARACTER
        else:
            reason = MalformedResponse.SYNTAX
        return None, MalformedResponse(reason, endpoint, detail=str(exc))

    if _json_depth(payload) > max_depth:
        return None, MalformedResponse(MalformedResponse.DEPTH, endpoint)
    return payload, None


class ApiProvider:
    """Execute signed requests against the MCHN API.

    Parameters:
        shared_key: Public half of the API key pair.
        private_key: Secret half of the API key pair.
        version: API version, requests go to ``/v<version>/``.
        provider_name: Cosmetic name of the caller.
        settings: Fully resolved settings; takes precedence over the
            individual arguments above.
        session: ``requests.Session`` to send requests through.
    """

    def __init__(
        self,
        shared_key: str = "",
        private_key: str = "",
        version: Any = DEFAULT_VERSION,
        provider_name: str = DEFAULT_PROVIDER_NAME,
        *,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if settings is None:
            settings = Settings(
                credential=Credential(shared_key, private_key),
                version=version,
                provider_name=provider_name or DEFAULT_PROVIDER_NAME,
            )
        self._settings = settings
        self._credential = settings.credential
        self._lock = threading.Lock()

        self.session = session if session is not None else requests.Session()
        self.session.max_redirects = settings.max_redirects
        self.session_id = uuid.uuid4().hex

        self.last_response: Optional[ApiResponse] = None
        self.response_data: Any = None
        self.response_code: Optional[int] = None
        self.pagination: PaginationState = NO_PAGES
        self.endpoint: Optional[str] = None

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> Self:
        return cls(settings=settings, session=session)

    def __repr__(self) -> str:
        return (
            f"ApiProvider(version={self.version!r}, "
            f"provider_name={self.provider_name!r}, "
            f"response_code={self.response_code!r}, "
            f"has_next_page={self.pagination.has_next_page!r}, "
            f"next_page={self.pagination.next_page!r}, "
            f"endpoint={self.endpoint!r})"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def version(self) -> int:
        return self._settings.version

    @property
    def provider_name(self) -> str:
        return self._settings.provider_name

    @property
    def shared_key(self) -> str:
        return self._credential.shared_key

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def _resolve(self, spec: RequestSpec) -> Tuple[str, str]:
        """Return ``(url, signed_path)`` for a request.

        The URL is quoted once, the way it is sent, and the signed path is
        cut from that same string.
        """
        base_url = self.base_url
        if spec.override_url:
            url = spec.override_url
            if url.startswith("/"):
                url = base_url + url
            elif not url.startswith(base_url):
                logger.warning("Following a link outside of %s: %s", base_url, url)
        else:
            url = f"{base_url}/v{self.version}/{spec.request_path.lstrip('/')}"

        url = prepare_url(url.replace(" ", "%20"))
        parts = urlsplit(url)
        return url, parts.path + (f"?{parts.query}" if parts.query else "")

    def _headers(self, path: str, body: Any, algorithm: Optional[str]) -> dict:
        headers = {
            SESSION_HEADER: self.session_id,
            "User-Agent": f"mchn-python ({self.provider_name})",
            "Accept": "application/json",
        }
        headers.update(
            self._credential.headers_for(path, body, algorithm or self._settings.algorithm)
        )
        return headers

    def execute(self, spec: RequestSpec) -> ApiResponse:
        """Sign and send a request, then decode its response.

        Parameters:
            spec: The request to execute.

        Returns:
            A new ``ApiResponse``. A body that is not valid JSON does not
            raise; the response carries ``data=None`` and ``error``.

        Raises:
            TransportError: if the request could not be sent or answered.
            UnsupportedAlgorithm: if the hash digest is unknown.
        """
        with self._lock:
            return self._execute(spec)

    def _execute(self, spec: RequestSpec) -> ApiResponse:
        # stale cursors must never leak into the next call
        self.pagination = NO_PAGES

        url, path = self._resolve(spec)

        body = None if is_empty_body(spec.body) else spec.body
        headers = self._headers(path, body, spec.algorithm)

        logger.debug("%s %s", spec.method, url)
        resp = request(
            self.session,
            RequestConfig(
                method=spec.method,
                url=url,
                headers=headers,
                json=body,
                timeout=self._settings.timeout,
            ),
        )
        self.response_code = resp.status_code

        raw = resp.text
        payload, error = decode_body(raw, url)
        if error is not None:
            logger.error("API response error - %s", error)
            pagination = NO_PAGES
        else:
            pagination = pagination_from_payload(payload)

        response = ApiResponse(
            status_code=resp.status_code,
            data=payload,
            raw_body=raw,
            requested_endpoint=url,
            pagination=pagination,
            error=error,
            headers=dict(resp.headers),
        )
        self.pagination = pagination
        self.response_data = payload
        self.endpoint = url
        self.last_response = response
        return response

    @property
    def cursor(self) -> PaginationCursor:
        return PaginationCursor(self)

    def has_next_page(self) -> bool:
        """Whether the last response linked a next page."""
        return self.pagination.has_next_page

    def has_previous_page(self) -> bool:
        return self.pagination.has_previous_page

    def get_next_page(self) -> Optional[ApiResponse]:
        """Fetch the next page of the last response.

        Returns the unchanged last response when there is no next page.
        """
        return self.cursor.fetch_next()

    def get_previous_page(self) -> Optional[ApiResponse]:
        return self.cursor.fetch_previous()

    def iter_pages(
        self, spec: RequestSpec, max_pages: Optional[int] = None
    ) -> Iterator[ApiResponse]:
        """Execute *spec* and yield it and every following page."""
        return self.cursor.pages(self.execute(spec), max_pages=max_pages)
