"""mchn: A Python client for the MCHN commerce API.

mchn signs, sends and paginates requests to the MCHN REST API so that
applications only deal with typed convenience methods.

Quick Start:
    ```python
    import mchn

    client = mchn.CommerceClient(shared_key="...", private_key="...")

    # Fetch one record
    order = client.get_order(14)
    print(order.status_code, order.data)

    # Walk a paginated collection
    for page in client.pages(client.get_products(limit=50)):
        for product in page.items:
            ...

    # Create a record; invalid requests never reach the network
    if client.build_order({"productID": 3, "price": 10}) is None:
        print(client.get_errors())
    ```

Key Features:
    - **Signing**: HMAC request hashes over a canonical JSON encoding
    - **Pagination**: cursor links followed with `get_next_page()` or `pages()`
    - **Validation**: request problems collected and reported together
    - **Configuration**: keys and host read from `MCHN_*` environment variables

Note that the request hash carries no timestamp or nonce: a captured request
can be replayed while its key pair is valid.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from ._core._models import ApiResponse, PaginationState, RequestSpec
from .api import ApiProvider, PaginationCursor
from .auth import Credential
from .client import MchnClient
from .commerce import (
    BuildOptions,
    CommerceClient,
    DeleteOptions,
    GetOptions,
    ListOptions,
)
from .config import Settings
from .exceptions import (
    MalformedResponse,
    MchnError,
    RequestValidationError,
    ResourceNotSupported,
    TransportError,
    UnsupportedAlgorithm,
)
from .routing import RESOURCE_SEGMENTS, is_supported, resolve_segment
from .signing import encode_request, sign
from .validation import ValidationError, ValidationResult

logger = logging.getLogger(__name__)

__all__ = [
    # clients
    "MchnClient",
    "CommerceClient",
    "ApiProvider",
    "PaginationCursor",
    # options
    "GetOptions",
    "ListOptions",
    "BuildOptions",
    "DeleteOptions",
    # models
    "ApiResponse",
    "PaginationState",
    "RequestSpec",
    "Credential",
    "Settings",
    # signing
    "encode_request",
    "sign",
    # routing
    "RESOURCE_SEGMENTS",
    "is_supported",
    "resolve_segment",
    # errors
    "MchnError",
    "MalformedResponse",
    "RequestValidationError",
    "ResourceNotSupported",
    "TransportError",
    "UnsupportedAlgorithm",
    "ValidationError",
    "ValidationResult",
]

try:
    __version__ = version("mchn")
except PackageNotFoundError:
    __version__ = "0.0.0"
