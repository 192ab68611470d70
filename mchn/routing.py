"""Mapping of logical commerce resource types to API path segments."""

from types import MappingProxyType
from typing import Mapping

from .exceptions import ResourceNotSupported

RESOURCE_SEGMENTS: Mapping[str, str] = MappingProxyType(
    {
        "account": "accounts",
        "address": "addresses",
        "article": "articles",
        "articleCategory": "articleCategories",
        "inventory": "inventories",
        "order": "orders",
        "orderPayment": "orderPayments",
        "orderStatus": "orderStatuses",
        "payment": "payments",
        "price": "prices",
        "product": "products",
        "productCategory": "productCategories",
        "shipment": "shipments",
        "shippingPrice": "shippingPrices",
    }
)

_SEGMENT_TYPES: Mapping[str, str] = MappingProxyType(
    {segment: resource for resource, segment in RESOURCE_SEGMENTS.items()}
)


def is_supported(resource_type: str) -> bool:
    """Return True if *resource_type* has an entry in the routing table."""
    return resource_type in RESOURCE_SEGMENTS


def resolve_segment(resource_type: str) -> str:
    """Return the URI path segment for a logical resource type.

    Parameters:
        resource_type: A logical resource name such as ``"order"``.

    Returns:
        The path segment, e.g. ``"orders"``.

    Raises:
        ResourceNotSupported: if the type is not in the routing table.
    """
    try:
        return RESOURCE_SEGMENTS[resource_type]
    except (KeyError, TypeError):
        raise ResourceNotSupported(resource_type) from None


def resolve_collection(name: str) -> str:
    """Resolve either a logical type (``"order"``) or a segment (``"orders"``).

    List endpoints are addressed by their collection segment, so both forms are
    accepted there.

    Raises:
        ResourceNotSupported: if neither form is known.
    """
    if isinstance(name, str) and name in _SEGMENT_TYPES:
        return name
    return resolve_segment(name)
