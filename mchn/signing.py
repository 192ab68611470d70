"""Canonical request encoding and HMAC request signing.

Every request carries a ``hash`` header computed as::

    base64(HMAC(private_key, canonical_bytes, digest))

where ``canonical_bytes`` is the compact JSON document::

    {"data":{"input":<body or null>,"requestURI":"<path>"},"sharedKey":"<key>"}

The server rebuilds the same document from the request it receives, so the
encoding has to be byte-for-byte reproducible: fixed key order, no whitespace,
forward slashes left unescaped and non-ASCII characters written as ``\\uXXXX``.

The hash contains no timestamp or nonce. A captured request and its hash can
be replayed for as long as the key pair is valid; this is a property of the
server protocol and is kept as-is for compatibility.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from typing import Any, Dict, Optional

from .exceptions import UnsupportedAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "SHA256"

API_KEY_HEADER = "x-api-key"
HASH_HEADER = "hash"


def is_empty_body(body: Any) -> bool:
    """Return True for bodies that are sent and signed as ``null``."""
    return body is None or (isinstance(body, (dict, list, tuple, str)) and not body)


def encode_request(path: str, body: Any, shared_key: str) -> bytes:
    """Serialize the signable identity of a request into canonical bytes.

    Parameters:
        path: The request URI, starting with the version segment
            (``/v1/orders/14``). Spaces must already be written as ``%20``;
            no other escaping is applied.
        body: The JSON body of the request, or ``None``. Empty bodies are
            encoded as ``null``.
        shared_key: The public half of the key pair.

    Returns:
        The UTF-8 bytes of the compact JSON document.
    """
    document = {
        "data": {
            "input": None if is_empty_body(body) else body,
            "requestURI": path,
        },
        "sharedKey": shared_key,
    }
    # json.dumps never escapes "/"; ensure_ascii matches the server's encoder.
    return json.dumps(document, separators=(",", ":"), ensure_ascii=True).encode(
        "utf-8"
    )


def normalize_algorithm(algorithm: Optional[str]) -> str:
    """Map a user supplied digest name onto a ``hashlib`` name.

    ``"SHA256"``, ``"sha-256"`` and ``"sha256"`` all resolve to ``"sha256"``;
    ``"SHA3-256"`` resolves to ``"sha3_256"``.

    Raises:
        UnsupportedAlgorithm: if no fixed-size digest of that name is available.
    """
    if not algorithm:
        algorithm = DEFAULT_ALGORITHM
    if not isinstance(algorithm, str):
        raise UnsupportedAlgorithm(str(algorithm))

    name = algorithm.strip().lower()
    candidates = (name, name.replace("-", ""), name.replace("-", "_"))
    for candidate in candidates:
        # shake digests have no fixed size and cannot key an HMAC
        if candidate in hashlib.algorithms_available and not candidate.startswith(
            "shake"
        ):
            return candidate
    raise UnsupportedAlgorithm(algorithm)


def sign(
    canonical_bytes: bytes,
    private_key: Optional[str],
    algorithm: Optional[str] = DEFAULT_ALGORITHM,
) -> str:
    """Compute the base64 encoded HMAC of *canonical_bytes*.

    Parameters:
        canonical_bytes: Output of ``encode_request``.
        private_key: The secret half of the key pair. An empty key is
            accepted and yields an HMAC keyed with the empty string.
        algorithm: Digest name, SHA256 by default.

    Returns:
        The digest, base64 encoded.

    Raises:
        UnsupportedAlgorithm: if *algorithm* names an unknown digest.
    """
    digest_name = normalize_algorithm(algorithm)
    key = (private_key or "").encode("utf-8")
    try:
        mac = hmac.new(key, canonical_bytes, digestmod=digest_name)
    except ValueError as exc:
        # listed by hashlib but refused by the backend, e.g. md5 under FIPS
        raise UnsupportedAlgorithm(str(algorithm)) from exc
    return base64.b64encode(mac.digest()).decode("ascii")


def signed_headers(
    path: str,
    body: Any,
    shared_key: str,
    private_key: Optional[str],
    algorithm: Optional[str] = DEFAULT_ALGORITHM,
) -> Dict[str, str]:
    """Return the authentication headers for a request."""
    auth_hash = sign(encode_request(path, body, shared_key), private_key, algorithm)
    logger.debug("Signed %s with %s", path, normalize_algorithm(algorithm))
    return {API_KEY_HEADER: shared_key, HASH_HEADER: auth_hash}
