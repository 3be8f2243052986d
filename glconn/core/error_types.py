"""Error type enumeration for GitLab Connections.

Provides type-safe error categorization for validation results and
connection test outcomes.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories surfaced to callers.

    Validation kinds are reported as form feedback and never raised;
    the client kinds correspond to the exception classes in
    ``glconn.core.exceptions``.
    """

    # Field validation
    EMPTY_FIELD = "empty_field"  # Required field missing
    DUPLICATE_NAME = "duplicate_name"  # Name already used by a different connection

    # Client lifecycle
    CONSTRUCTION_ERROR = "construction_error"  # Client builder failed
    REMOTE_REJECTED = "remote_rejected"  # GitLab answered with an application-level error
    TRANSPORT_FAILURE = "transport_failure"  # Network or TLS failure
