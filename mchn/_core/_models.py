"""Simple data models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from ..exceptions import MalformedResponse

GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"

METHODS = (GET, POST, PUT, DELETE)


@dataclass(frozen=True)
class RequestSpec:
    """A logical request, built fresh for every call.

    ``path`` is relative to the versioned API root (``orders/14``) and
    ``query_params`` keeps its insertion order. When ``override_url`` is set
    it is requested verbatim instead, as done for pagination links.
    """

    method: str = GET
    path: str = ""
    query_params: Tuple[Tuple[str, str], ...] = ()
    body: Optional[Any] = None
    override_url: Optional[str] = None
    algorithm: Optional[str] = None

    def __post_init__(self) -> None:
        method = (self.method or GET).upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "method", method)
        if isinstance(self.query_params, Mapping):
            object.__setattr__(
                self, "query_params", tuple(self.query_params.items())
            )
        else:
            object.__setattr__(self, "query_params", tuple(self.query_params))

    @property
    def query_string(self) -> str:
        """``k=v&k2=v2`` in insertion order, values left unescaped."""
        return "&".join(f"{name}={value}" for name, value in self.query_params)

    @property
    def request_path(self) -> str:
        """The path with its query string appended, if any."""
        query = self.query_string
        if not query:
            return self.path
        separator = "&" if "?" in self.path else "?"
        return f"{self.path}{separator}{query}"


@dataclass(frozen=True)
class PaginationState:
    """Cursor position derived from ``metadata.pagination`` of a response."""

    next_page: Optional[str] = None
    previous_page: Optional[str] = None

    @property
    def has_next_page(self) -> bool:
        return self.next_page is not None

    @property
    def has_previous_page(self) -> bool:
        return self.previous_page is not None


NO_PAGES = PaginationState()


@dataclass(frozen=True)
class ApiResponse:
    """The outcome of one executed request.

    Every call produces a new instance; nothing is shared with later calls.

    Attributes:
        status_code: HTTP status of the response, 0 when none was received
        data: Decoded JSON payload, ``None`` when the body was malformed
        raw_body: The undecoded response body
        requested_endpoint: The URL that was requested
        pagination: Next/previous page links found in the payload
        error: Set when the body could not be decoded
    """

    status_code: int
    data: Any
    raw_body: str
    requested_endpoint: str
    pagination: PaginationState = NO_PAGES
    error: Optional[MalformedResponse] = None
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)

    @property
    def has_next_page(self) -> bool:
        return self.pagination.has_next_page

    @property
    def next_page_token(self) -> Optional[str]:
        return self.pagination.next_page

    @property
    def ok(self) -> bool:
        """True for 2xx responses whose body decoded."""
        return 200 <= self.status_code < 300 and self.error is None

    @property
    def is_malformed(self) -> bool:
        return self.error is not None

    @property
    def message(self) -> Optional[str]:
        """The ``message`` of an error payload, if any."""
        if isinstance(self.data, Mapping):
            return self.data.get("message")
        return None

    @property
    def items(self) -> List[Any]:
        """The ``data`` member of the payload as a list."""
        if not isinstance(self.data, Mapping):
            return []
        items = self.data.get("data")
        if items is None:
            return []
        return items if isinstance(items, list) else [items]
