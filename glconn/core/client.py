"""GitLab REST API client.

A thin httpx wrapper that authenticates with a personal access token and
maps httpx failures onto the glconn exception hierarchy.
"""

import logging
from typing import Any

import httpx

from glconn.core.exceptions import RemoteRejectedError, TransportFailureError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v4"


def _error_message(response: httpx.Response) -> str:
    """Extract GitLab's error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error_description", "error"):
            value = payload.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    return response.reason_phrase or f"HTTP {response.status_code}"


class GitLabClient:
    """Client for a single GitLab instance."""

    def __init__(
        self,
        url: str,
        api_token: str,
        ignore_certificate_errors: bool = False,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.ignore_certificate_errors = ignore_certificate_errors

        self.headers = {
            "PRIVATE-TOKEN": api_token,
            "accept": "application/json",
        }

        self.client = httpx.Client(
            base_url=self.url + API_PREFIX,
            headers=self.headers,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            verify=not ignore_certificate_errors,
            transport=transport,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.debug("GitLab %s %s rejected: %s %s", method, path, e.response.status_code, message)
            raise RemoteRejectedError(
                status_code=e.response.status_code,
                message=message,
                url=str(e.request.url),
            ) from e
        except httpx.TransportError as e:
            logger.debug("GitLab %s %s failed: %s", method, path, e)
            raise TransportFailureError(f"Cannot reach {self.url}: {e}", cause=e) from e
        return response

    def head_current_user(self) -> None:
        """Lightweight authenticated identity check (``HEAD /user``)."""
        self._request("HEAD", "/user")

    def get_current_user(self) -> dict[str, Any]:
        """Return the user owning the API token."""
        response = self._request("GET", "/user")
        return response.json()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "GitLabClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GitLabClient(url={self.url!r}, ignore_certificate_errors={self.ignore_certificate_errors})"
