"""RESPX-based HTTP mocking fixtures for testing.

Reusable fixtures for mocking the GitLab REST API with RESPX.
"""

import pytest
import respx

GITLAB_URL = "https://gitlab.example.com"


@pytest.fixture
def gitlab_current_user():
    """Standard GitLab ``GET /user`` response."""
    return {
        "id": 42,
        "username": "ci-bot",
        "name": "CI Bot",
        "state": "active",
        "web_url": f"{GITLAB_URL}/ci-bot",
    }


@pytest.fixture
def gitlab_unauthorized():
    """GitLab's answer to a missing or revoked token."""
    return {"message": "401 Unauthorized"}


@pytest.fixture
def mock_gitlab_api():
    """Mock GitLab API endpoints with RESPX.

    Yields a RESPX router that can be used to register mock responses
    for the GitLab instance at ``GITLAB_URL``.

    Example:
        def test_user(mock_gitlab_api, gitlab_current_user):
            mock_gitlab_api.get("/api/v4/user").mock(
                return_value=httpx.Response(200, json=gitlab_current_user)
            )
    """
    with respx.mock(base_url=GITLAB_URL, assert_all_called=False) as respx_mock:
        yield respx_mock
