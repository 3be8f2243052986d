"""Endpoint response DTOs.

Type-safe response containers that provide consistent structure
across all endpoint responses.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse, Response

from glconn.core.connection.profile import ConnectionProfile
from glconn.core.connection.service import CredentialOption
from glconn.core.connection.validation import FormValidation


@dataclass(frozen=True, slots=True)
class ConnectionsResponse:
    """Ordered connection list, as returned by GET and PUT /connections."""

    status: int
    content: dict[str, Any]

    @classmethod
    def from_profiles(cls, profiles: Iterable[ConnectionProfile], status: int = 200) -> "ConnectionsResponse":
        return cls(status=status, content={"connections": [p.to_dict() for p in profiles]})

    def to_response(self) -> Response:
        """Convert to FastAPI response."""
        return JSONResponse(status_code=self.status, content=self.content)


@dataclass(frozen=True, slots=True)
class ValidationErrorsResponse:
    """Rejected configuration submission."""

    errors: tuple[FormValidation, ...]

    def to_response(self) -> Response:
        return JSONResponse(
            status_code=422,
            content={"errors": [error.to_dict() for error in self.errors]},
        )


@dataclass(frozen=True, slots=True)
class FormValidationResponse:
    """Outcome of a field check or connection test. Always HTTP 200."""

    result: FormValidation

    def to_response(self) -> Response:
        return JSONResponse(status_code=200, content=self.result.to_dict())


@dataclass(frozen=True, slots=True)
class CredentialOptionsResponse:
    """API token choices for a connection."""

    options: tuple[CredentialOption, ...]

    def to_response(self) -> Response:
        return JSONResponse(
            status_code=200,
            content={"options": [option.to_dict() for option in self.options]},
        )
