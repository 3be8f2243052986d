"""Test configuration constants for GitLab Connections tests."""

TEST_ADMIN_API_KEY = "test-admin-key"

TEST_HEADERS = {"x-api-key": TEST_ADMIN_API_KEY}

TEST_BEARER_HEADERS = {"Authorization": f"Bearer {TEST_ADMIN_API_KEY}"}

__all__ = [
    "TEST_ADMIN_API_KEY",
    "TEST_BEARER_HEADERS",
    "TEST_HEADERS",
]
