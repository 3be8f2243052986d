"""Endpoint request DTOs.

Request bodies are pydantic models so FastAPI validates their shape; query
parameters are collected into frozen dataclasses through ``from_fastapi``.
"""

from dataclasses import dataclass

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field

from glconn.core.connection.profile import ConnectionProfile


class ConnectionPayload(BaseModel):
    """One connection as submitted by the administration form."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(None, description="Identity of an existing connection being edited")
    name: str = ""
    url: str = ""
    api_token_id: str = Field("", alias="apiTokenId")
    ignore_certificate_errors: bool = Field(False, alias="ignoreCertificateErrors")

    def to_profile(self) -> ConnectionProfile:
        return ConnectionProfile.from_dict(
            {
                "id": self.id,
                "name": self.name,
                "url": self.url,
                "api_token_id": self.api_token_id,
                "ignore_certificate_errors": self.ignore_certificate_errors,
            }
        )


class ConfigurationSubmission(BaseModel):
    """The full connection configuration; replaces whatever is configured."""

    connections: list[ConnectionPayload] = Field(default_factory=list)

    def to_profiles(self) -> list[ConnectionProfile]:
        return [connection.to_profile() for connection in self.connections]


class ConnectionTestRequest(BaseModel):
    """Ad hoc connection settings to test, typically from a form in progress."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    api_token_id: str = Field("", alias="apiTokenId")
    ignore_certificate_errors: bool = Field(False, alias="ignoreCertificateErrors")


@dataclass(frozen=True, slots=True)
class FieldCheckRequest:
    """Parameters for the live field validation endpoints."""

    value: str
    id: str | None  # noqa: A003

    @classmethod
    def from_fastapi(
        cls,
        value: str = Query("", description="Current field value"),
        id: str | None = Query(  # noqa: A002
            None,
            description="Identity of the connection being edited (name checks only)",
        ),
    ) -> "FieldCheckRequest":
        """Create request from FastAPI dependencies."""
        return cls(value=value, id=id)
