"""Field validation for connection forms.

Validators never raise: they return a ``FormValidation`` carrying a
user-facing message, suitable for live form feedback. They are pure, so a
UI calling them repeatedly (or first with an empty placeholder value) is
harmless.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from glconn.core.connection.profile import ConnectionProfile
from glconn.core.connection.registry import ConnectionRegistry
from glconn.core.error_types import ErrorType

NAME_REQUIRED = "Connection name required."
NAME_EXISTS = "A connection with the name '{name}' already exists."
URL_REQUIRED = "GitLab host URL required."
API_TOKEN_REQUIRED = "API token required."
CONNECTION_SUCCESS = "Success"


@dataclass(frozen=True, slots=True)
class FormValidation:
    """Outcome of validating one form field or one connection test."""

    kind: str  # "ok" or "error"
    message: str = ""
    error_type: ErrorType | None = None
    field: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"

    @classmethod
    def ok(cls, message: str = "") -> "FormValidation":
        return cls(kind="ok", message=message)

    @classmethod
    def error(
        cls, message: str, error_type: ErrorType | None = None, field: str | None = None
    ) -> "FormValidation":
        return cls(kind="error", message=message, error_type=error_type, field=field)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.error_type is not None:
            result["error_type"] = self.error_type.value
        if self.field is not None:
            result["field"] = self.field
        return result


def check_name(
    registry: ConnectionRegistry, value: str | None, profile_id: str | None = None
) -> FormValidation:
    """Validate a connection name against the current registry.

    ``profile_id`` identifies the connection being edited; a name already
    held by that same connection is not a duplicate.
    """
    if not value:
        return FormValidation.error(NAME_REQUIRED, ErrorType.EMPTY_FIELD, "name")

    existing = registry.get(value)
    if existing is not None and existing.profile_id != profile_id:
        return FormValidation.error(
            NAME_EXISTS.format(name=value), ErrorType.DUPLICATE_NAME, "name"
        )
    return FormValidation.ok()


def check_url(value: str | None) -> FormValidation:
    if not value:
        return FormValidation.error(URL_REQUIRED, ErrorType.EMPTY_FIELD, "url")
    return FormValidation.ok()


def check_api_token_id(value: str | None) -> FormValidation:
    if not value:
        return FormValidation.error(API_TOKEN_REQUIRED, ErrorType.EMPTY_FIELD, "api_token_id")
    return FormValidation.ok()


def validate_profiles(profiles: Iterable[ConnectionProfile]) -> list[FormValidation]:
    """Validate a whole configuration submission.

    Returns:
        Every failure found, in profile order; empty when the submission
        can be applied.
    """
    profiles = list(profiles)
    failures: list[FormValidation] = []

    for profile in profiles:
        name_result = (
            FormValidation.error(NAME_REQUIRED, ErrorType.EMPTY_FIELD, "name")
            if not profile.name
            else FormValidation.ok()
        )
        for result in (
            name_result,
            check_url(profile.url),
            check_api_token_id(profile.api_token_id),
        ):
            if not result.is_ok:
                failures.append(result)

    counts = Counter(profile.name for profile in profiles if profile.name)
    for name, count in counts.items():
        if count > 1:
            failures.append(
                FormValidation.error(NAME_EXISTS.format(name=name), ErrorType.DUPLICATE_NAME, "name")
            )

    return failures
