"""Client configuration.

Settings have library defaults and can be read from the environment:

* ``MCHN_SHARED_KEY`` / ``MCHN_PRIVATE_KEY``: the API key pair
* ``MCHN_API_VERSION``: API version number, ``1`` by default
* ``MCHN_API_HOST``: API host, ``api.mchn.io`` by default
* ``MCHN_TIMEOUT``: transport timeout in seconds, ``30`` by default
* ``MCHN_HASH_ALGORITHM``: request hash digest, ``SHA256`` by default
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from typing_extensions import Self

from .auth.credentials import Credential
from .signing import DEFAULT_ALGORITHM

logger = logging.getLogger(__name__)

DEFAULT_HOST = "api.mchn.io"
DEFAULT_VERSION = 1
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_REDIRECTS = 20
DEFAULT_PROVIDER_NAME = "MCHN"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for an ``ApiProvider``.

    Attributes:
        credential: The API key pair
        version: API version; requests go to ``/v<version>/...``
        host: API host name, without scheme
        provider_name: Cosmetic name sent in the ``User-Agent``
        timeout: Seconds passed through to the transport, ``None`` waits forever
        max_redirects: Redirects followed by the transport
        algorithm: Digest used for the request hash
    """

    credential: Credential = field(default_factory=Credential)
    version: int = DEFAULT_VERSION
    host: str = DEFAULT_HOST
    provider_name: str = DEFAULT_PROVIDER_NAME
    timeout: Optional[float] = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        object.__setattr__(self, "version", _parse_version(self.version))
        object.__setattr__(self, "host", _strip_host(self.host))

    @property
    def base_url(self) -> str:
        """Scheme and host, e.g. ``https://api.mchn.io``."""
        return f"https://{self.host}"

    def with_overrides(self, **overrides: Any) -> Self:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from ``MCHN_*`` environment variables.

        Parameters:
            environ: Mapping to read from, ``os.environ`` by default.
        """
        env = os.environ if environ is None else environ
        timeout = env.get("MCHN_TIMEOUT")
        settings = cls(
            credential=Credential(
                shared_key=env.get("MCHN_SHARED_KEY", ""),
                private_key=env.get("MCHN_PRIVATE_KEY", ""),
            ),
            version=env.get("MCHN_API_VERSION") or DEFAULT_VERSION,  # type: ignore[arg-type]
            host=env.get("MCHN_API_HOST") or DEFAULT_HOST,
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            algorithm=env.get("MCHN_HASH_ALGORITHM") or DEFAULT_ALGORITHM,
        )
        if not settings.credential.is_complete():
            logger.warning(
                "MCHN_SHARED_KEY or MCHN_PRIVATE_KEY is not set; requests will be rejected"
            )
        return settings


def _parse_version(version: Any) -> int:
    """Accept ``1``, ``"1"`` and ``"v1"``; empty values fall back to the default."""
    if version is None or version == "":
        return DEFAULT_VERSION
    if isinstance(version, str):
        version = version.strip().lstrip("vV")
    try:
        parsed = int(version)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid API version: {version!r}") from None
    if parsed < 1:
        raise ValueError(f"Invalid API version: {version!r}")
    return parsed


def _strip_host(host: str) -> str:
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme) :]
    return host.rstrip("/")
