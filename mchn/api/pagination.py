"""Cursor based pagination.

List endpoints answer with::

    {"data": [...], "metadata": {"pagination": {"nextPage": "/v1/products?limit=10&offset=10"}}}

``nextPage`` is an opaque link to the following page. A ``null``, empty or
missing ``nextPage`` all mean that there is no further page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from .._core._models import NO_PAGES, ApiResponse, PaginationState, RequestSpec

if TYPE_CHECKING:
    from .provider import ApiProvider

logger = logging.getLogger(__name__)


def _link(pagination: Mapping[str, Any], key: str) -> Optional[str]:
    value = pagination.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def pagination_from_payload(payload: Any) -> PaginationState:
    """Extract the pagination state of a decoded response payload.

    Only successful payloads are considered: an object with a non-null ``message``
    is an error and never paginates.
    """
    if not isinstance(payload, Mapping) or payload.get("message") is not None:
        return NO_PAGES
    metadata = payload.get("metadata")
    if not isinstance(metadata, Mapping):
        return NO_PAGES
    pagination = metadata.get("pagination")
    if not isinstance(pagination, Mapping):
        return NO_PAGES
    return PaginationState(
        next_page=_link(pagination, "nextPage"),
        previous_page=_link(pagination, "previousPage"),
    )


class PaginationCursor:
    """Walks the pages of a list request through an ``ApiProvider``.

    The cursor follows the provider's most recent response, so it reflects
    whatever request was executed last on that provider.
    """

    def __init__(self, provider: ApiProvider) -> None:
        self.provider = provider

    @property
    def state(self) -> PaginationState:
        return self.provider.pagination

    def has_next(self) -> bool:
        return self.state.has_next_page

    def has_previous(self) -> bool:
        return self.state.has_previous_page

    def fetch_next(self) -> Optional[ApiResponse]:
        """Request the next page.

        Returns:
            The new response, or the unchanged last response when there is no
            next page.
        """
        return self._follow(self.state.next_page)

    def fetch_previous(self) -> Optional[ApiResponse]:
        """Request the previous page, if the last response linked one."""
        return self._follow(self.state.previous_page)

    def _follow(self, link: Optional[str]) -> Optional[ApiResponse]:
        if not link:
            return self.provider.last_response
        return self.provider.execute(RequestSpec(method="GET", override_url=link))

    def pages(
        self, first: Optional[ApiResponse] = None, max_pages: Optional[int] = None
    ) -> Iterator[ApiResponse]:
        """Yield *first* (or the last response) and every following page.

        Parameters:
            first: The response to start from, defaults to the provider's last
                response.
            max_pages: Stop after yielding this many pages.
        """
        response = first if first is not None else self.provider.last_response
        count = 0
        while response is not None:
            yield response
            count += 1
            if max_pages is not None and count >= max_pages:
                return
            if not response.has_next_page:
                return
            logger.debug("Following next page %s", response.next_page_token)
            response = self.provider.execute(
                RequestSpec(method="GET", override_url=response.next_page_token)
            )
