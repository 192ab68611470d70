"""API key pair used to sign requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..signing import DEFAULT_ALGORITHM, signed_headers


@dataclass(frozen=True)
class Credential:
    """Immutable shared/private key pair.

    The shared key is sent in the clear as ``x-api-key``; the private key is
    only ever used as the HMAC key and is kept out of ``repr``.

    Attributes:
        shared_key: Public identifier of the API key
        private_key: Secret used to key the request hash
    """

    shared_key: str = ""
    private_key: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        # None is accepted and treated like an empty key
        object.__setattr__(self, "shared_key", self.shared_key or "")
        object.__setattr__(self, "private_key", self.private_key or "")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Credential:
        """Build a credential from ``{"sharedKey": ..., "privateKey": ...}``.

        Snake case keys (``shared_key``, ``private_key``) are accepted too.
        """
        return cls(
            shared_key=data.get("sharedKey", data.get("shared_key", "")),
            private_key=data.get("privateKey", data.get("private_key", "")),
        )

    def headers_for(
        self, path: str, body: Any = None, algorithm: Optional[str] = DEFAULT_ALGORITHM
    ) -> Dict[str, str]:
        """Return the ``x-api-key`` and ``hash`` headers for a request."""
        return signed_headers(path, body, self.shared_key, self.private_key, algorithm)

    def is_complete(self) -> bool:
        """Return True when both halves of the key pair are set."""
        return bool(self.shared_key and self.private_key)
