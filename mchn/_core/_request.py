"""HTTP transport used by the API provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, MutableMapping, Optional

import requests

from ..exceptions import TransportError

log = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    """A fully resolved physical request."""

    method: str = "GET"
    url: str = ""
    headers: MutableMapping[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
    timeout: Optional[float] = 30


def prepare_url(url: str) -> str:
    """Return *url* exactly as ``requests`` will put it on the wire.

    Characters outside the allowed URI set (``|``, ``{``, non-ASCII text, ...)
    come back percent-encoded; existing escapes are kept.

    Raises:
        TransportError: if the URL cannot be parsed.
    """
    prepared = requests.PreparedRequest()
    try:
        prepared.prepare_url(url, None)
    except requests.RequestException as exc:
        raise TransportError(f"Invalid URL {url}: {exc}", endpoint=url) from exc
    return prepared.url


def request(session: requests.Session, config: RequestConfig) -> requests.Response:
    """Perform a single HTTP request.

    There is no retry; connection problems are surfaced to the caller.
    Non-2xx responses are returned like any other response.

    Args:
        session: The session the request is sent through.
        config: Fully populated ``RequestConfig`` instance.

    Returns:
        The ``requests.Response``.

    Raises:
        TransportError: on connection errors, timeouts or too many redirects.
    """
    headers = dict(config.headers)  # copy to avoid mutating caller data
    kwargs: dict = {}
    if config.json is not None:
        kwargs["json"] = config.json

    try:
        resp = session.request(
            method=config.method,
            url=config.url,
            headers=headers,
            timeout=config.timeout,
            **kwargs,
        )
    except requests.RequestException as exc:
        log.warning("%s %s failed: %s", config.method, config.url, exc)
        raise TransportError(
            f"{config.method} {config.url} failed: {exc}", endpoint=config.url
        ) from exc

    log.debug("%s %s -> %s", config.method, config.url, resp.status_code)
    return resp
