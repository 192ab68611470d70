"""Authentication and credential management package."""

from mchn.auth.credentials import Credential

__all__ = [
    "Credential",
]
