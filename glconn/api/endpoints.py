import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from glconn.api.models import (
    ConfigurationSubmission,
    ConnectionsResponse,
    ConnectionTestRequest,
    CredentialOptionsResponse,
    FieldCheckRequest,
    FormValidationResponse,
    ValidationErrorsResponse,
)
from glconn.core.config import Config
from glconn.core.connection.service import ConnectionConfigService
from glconn.core.exceptions import (
    ClientConstructionError,
    RemoteRejectedError,
    StorageError,
    TransportFailureError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_connection_service(request: Request) -> ConnectionConfigService:
    return request.app.state.connection_service


def get_config(request: Request) -> Config:
    return request.app.state.config


def _client_api_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization.removeprefix("Bearer ")
    return None


def has_admin_access(
    config: Config = Depends(get_config),
    x_api_key: str | None = Header(None),
    authorization: str | None = Header(None),
) -> bool:
    return config.validate_admin_api_key(_client_api_key(x_api_key, authorization))


def require_admin_access(allowed: bool = Depends(has_admin_access)) -> None:
    """Reject callers without the admin key (when one is configured)."""
    if not allowed:
        logger.warning("Invalid admin API key provided by client")
        raise HTTPException(status_code=401, detail="Invalid admin API key.")


@router.get("/health")
def health(service: ConnectionConfigService = Depends(get_connection_service)) -> dict[str, Any]:
    return {"status": "healthy", "connections": len(service.connections)}


@router.get("/connections")
def list_connections(
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    return ConnectionsResponse.from_profiles(service.connections).to_response()


@router.put("/connections", dependencies=[Depends(require_admin_access)])
def submit_configuration(
    submission: ConfigurationSubmission,
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    try:
        failures = service.configure(submission.to_profiles())
    except StorageError as e:
        logger.error("Cannot persist connection configuration: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if failures:
        return ValidationErrorsResponse(tuple(failures)).to_response()
    return ConnectionsResponse.from_profiles(service.connections).to_response()


@router.get("/connections/check-name")
def check_name(
    params: FieldCheckRequest = Depends(FieldCheckRequest.from_fastapi),
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    return FormValidationResponse(service.check_name(params.value, params.id)).to_response()


@router.get("/connections/check-url")
def check_url(
    params: FieldCheckRequest = Depends(FieldCheckRequest.from_fastapi),
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    return FormValidationResponse(service.check_url(params.value)).to_response()


@router.get("/connections/check-api-token-id")
def check_api_token_id(
    params: FieldCheckRequest = Depends(FieldCheckRequest.from_fastapi),
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    return FormValidationResponse(service.check_api_token_id(params.value)).to_response()


@router.post("/connections/test", dependencies=[Depends(require_admin_access)])
def test_connection(
    body: ConnectionTestRequest,
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    result = service.test_connection(body.url, body.api_token_id, body.ignore_certificate_errors)
    return FormValidationResponse(result).to_response()


@router.get("/connections/api-token-options")
def api_token_options(
    name: str | None = Query(None, description="Connection whose current token is pre-selected"),
    empty_selection: bool = Query(False, description="Prepend an empty choice"),
    allowed: bool = Depends(has_admin_access),
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    # Callers without access get an empty list, not an error
    if not allowed:
        return CredentialOptionsResponse(()).to_response()
    options = service.list_api_token_options(name, include_empty_selection=empty_selection)
    return CredentialOptionsResponse(tuple(options)).to_response()


@router.get("/connections/{name}/user")
def current_user(
    name: str,
    service: ConnectionConfigService = Depends(get_connection_service),
) -> Response:
    """Resolve a connection to its cached client and ask GitLab who we are."""
    try:
        client = service.get_client(name)
    except ClientConstructionError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    if client is None:
        raise HTTPException(status_code=404, detail=f"Connection '{name}' not found")

    try:
        user = client.get_current_user()
    except RemoteRejectedError as e:
        raise HTTPException(status_code=502, detail=e.message) from e
    except TransportFailureError as e:
        raise HTTPException(status_code=502, detail=e.cause_message) from e

    return JSONResponse(status_code=200, content=user)
