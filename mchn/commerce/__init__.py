"""Commerce endpoints of the MCHN API."""

from mchn.commerce.client import CommerceClient
from mchn.commerce.options import (
    BuildOptions,
    DeleteOptions,
    GetOptions,
    ListOptions,
    render_query_params,
)

__all__ = [
    "CommerceClient",
    "BuildOptions",
    "DeleteOptions",
    "GetOptions",
    "ListOptions",
    "render_query_params",
]
