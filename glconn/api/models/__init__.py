"""API models for endpoint request/response DTOs.

Keeps the HTTP layer separate from the connection service.
"""

from glconn.api.models.endpoint_requests import (
    ConfigurationSubmission,
    ConnectionPayload,
    ConnectionTestRequest,
    FieldCheckRequest,
)
from glconn.api.models.endpoint_responses import (
    ConnectionsResponse,
    CredentialOptionsResponse,
    FormValidationResponse,
    ValidationErrorsResponse,
)

__all__ = [
    "ConfigurationSubmission",
    "ConnectionPayload",
    "ConnectionTestRequest",
    "ConnectionsResponse",
    "CredentialOptionsResponse",
    "FieldCheckRequest",
    "FormValidationResponse",
    "ValidationErrorsResponse",
]
