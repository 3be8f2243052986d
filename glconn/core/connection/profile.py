import uuid
from dataclasses import dataclass, field
from typing import Any


def _new_profile_id() -> str:
    return uuid.uuid4().hex


def _flag(value: Any) -> bool:
    """Read a stored boolean; anything unrecognized keeps verification on."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return value is True or (isinstance(value, int) and value == 1)


@dataclass(frozen=True)
class ConnectionProfile:
    """Configuration for one named GitLab connection.

    Profiles are immutable: a configuration submission replaces the whole
    collection instead of editing profiles in place. No validation happens
    here; see ``glconn.core.connection.validation``.
    """

    name: str
    url: str
    api_token_id: str
    ignore_certificate_errors: bool = False
    # Identity distinct from the name, so renaming a connection to its
    # own current name is not reported as a duplicate
    profile_id: str = field(default_factory=_new_profile_id, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.profile_id,
            "name": self.name,
            "url": self.url,
            "api_token_id": self.api_token_id,
            "ignore_certificate_errors": self.ignore_certificate_errors,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionProfile":
        """Build a profile from persisted or submitted data.

        Accepts both snake_case and camelCase keys for the token reference
        and certificate flag. Missing strings default to empty so that
        validation, not construction, reports them.
        """
        api_token_id = data.get("api_token_id", data.get("apiTokenId", ""))
        ignore_errors = data.get(
            "ignore_certificate_errors", data.get("ignoreCertificateErrors", False)
        )
        kwargs: dict[str, Any] = {
            "name": data.get("name") or "",
            "url": data.get("url") or "",
            "api_token_id": api_token_id or "",
            "ignore_certificate_errors": _flag(ignore_errors),
        }
        profile_id = data.get("id") or data.get("profile_id")
        if profile_id:
            kwargs["profile_id"] = str(profile_id)
        return cls(**kwargs)
