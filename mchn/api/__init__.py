"""Request execution and pagination."""

from mchn.api.pagination import PaginationCursor, pagination_from_payload
from mchn.api.provider import ApiProvider, decode_body

__all__ = [
    "ApiProvider",
    "PaginationCursor",
    "decode_body",
    "pagination_from_payload",
]
