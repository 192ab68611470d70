"""Base class for MCHN API clients."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional

import requests
from typing_extensions import Self

from ._core._models import ApiResponse, RequestSpec
from .api.provider import ApiProvider
from .config import DEFAULT_VERSION, Settings
from .validation import ValidationResult

logger = logging.getLogger(__name__)


class MchnClient:
    """Owns an ``ApiProvider`` and the validation errors of its calls.

    Validation problems never raise by default: the offending call returns
    ``None`` without touching the network and its errors are kept in
    ``errors`` until ``clear_errors`` is called. With ``strict=True`` the
    errors are still recorded, then raised as ``RequestValidationError``.
    """

    provider_name = "MCHN"

    def __init__(
        self,
        shared_key: str = "",
        private_key: str = "",
        version: Any = DEFAULT_VERSION,
        *,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        strict: bool = False,
    ) -> None:
        self.strict = strict
        self.api = ApiProvider(
            shared_key,
            private_key,
            version,
            self.provider_name,
            settings=settings,
            session=session,
        )
        self.errors = ValidationResult()

    @classmethod
    def from_environ(
        cls, session: Optional[requests.Session] = None, strict: bool = False
    ) -> Self:
        """Create a client configured from ``MCHN_*`` environment variables."""
        settings = Settings.from_environ().with_overrides(provider_name=cls.provider_name)
        return cls(settings=settings, session=session, strict=strict)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api={self.api!r}, errors={len(self.errors.errors)})"

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.api.close()

    @property
    def endpoint(self) -> Optional[str]:
        """URL of the most recent request that was answered."""
        return self.api.endpoint

    @property
    def shared_key(self) -> str:
        return self.api.shared_key

    @property
    def last_response(self) -> Optional[ApiResponse]:
        return self.api.last_response

    def has_next_page(self) -> bool:
        return self.api.has_next_page()

    def get_next_page(self) -> Optional[ApiResponse]:
        return self.api.get_next_page()

    def get_previous_page(self) -> Optional[ApiResponse]:
        return self.api.get_previous_page()

    def pages(
        self, first: Optional[ApiResponse] = None, max_pages: Optional[int] = None
    ) -> Iterator[ApiResponse]:
        """Iterate from *first* (default: the last response) through every next page."""
        return self.api.cursor.pages(first, max_pages=max_pages)

    def add_error(
        self, field: str, description: str, code: int = 400, value: Any = None
    ) -> None:
        self.errors.add_error(field=field, description=description, value=value, code=code)

    def clear_errors(self) -> None:
        self.errors = ValidationResult()

    def get_errors(self) -> Dict[str, Any]:
        """Return ``{"message": ..., "errors": [...]}``, or ``{}`` without errors.

        ``message`` is the description of the first recorded error.
        """
        if not self.errors.errors:
            return {}
        return {
            "message": self.errors.errors[0].description,
            "errors": list(self.errors.errors),
        }

    def _reject(self, result: ValidationResult) -> None:
        """Record the errors of a request that will not be sent.

        Raises:
            RequestValidationError: in strict mode.
        """
        self.errors.merge(result)
        logger.warning("Request not sent. %s", result)
        if self.strict:
            result.raise_if_invalid()

    def _execute(self, spec: RequestSpec) -> ApiResponse:
        return self.api.execute(spec)
