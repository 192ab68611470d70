"""Typed options for commerce requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass
class GetOptions:
    """Fetch one object: ``GET <segment>/<id>``.

    Attributes:
        type: Logical resource type, e.g. ``"order"``
        id: ID of the object
    """

    type: Optional[str] = None
    id: Any = None


@dataclass
class ListOptions:
    """Fetch a collection.

    ``GET <segment>[/<id>/<sub_resource>[/<secondary_id>]][/<auxiliary>][?<params>]``

    Attributes:
        type: Logical resource type (``"order"``) or its segment (``"orders"``)
        id: ID of the parent object for nested collections
        sub_resource: Nested collection name, e.g. ``"shipments"``
        secondary_id: ID inside the nested collection, e.g. a country code
        auxiliary: Auxiliary endpoint, e.g. ``"count"``
        params: URL parameters such as ``limit`` and ``offset``
    """

    type: Optional[str] = None
    id: Any = None
    sub_resource: Optional[str] = None
    secondary_id: Any = None
    auxiliary: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BuildOptions:
    """Create an object: ``POST <segment>/[<parent_id>]`` with ``data`` as body.

    A ``parentID`` key inside ``data`` is used as ``parent_id`` when the
    latter is not given. The key is still sent and signed as part of the body.
    """

    type: Optional[str] = None
    data: Any = None
    parent_id: Any = None


@dataclass
class DeleteOptions:
    """Delete an object: ``DELETE <segment>/<id>``."""

    type: Optional[str] = None
    id: Any = None


def render_query_params(params: Optional[Mapping[str, Any]]) -> Tuple[Tuple[str, str], ...]:
    """Render URL parameters as ordered ``(name, value)`` string pairs.

    Booleans become ``true``/``false``, sequences are joined with commas and
    ``None`` values are dropped. Values are not URL-escaped.
    """
    rendered = []
    for name, value in (params or {}).items():
        if value is None:
            continue
        rendered.append((name, _render_value(value)))
    return tuple(rendered)


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_render_value(v) for v in value)
    return str(value)
