"""Selection of credentials usable as GitLab API tokens."""

from collections.abc import Iterable

from . import Credential, CredentialKind


class ApiTokenCredentialMatcher:
    """Matches credentials whose kind is an opaque secret string.

    Username/password pairs, certificates and SSH keys cannot be sent as a
    GitLab ``PRIVATE-TOKEN`` and are never offered as API token choices.
    """

    def matches(self, credential: Credential) -> bool:
        return credential.kind == CredentialKind.STRING

    def __call__(self, credential: Credential) -> bool:
        return self.matches(credential)


def filter_api_token_credentials(credentials: Iterable[Credential]) -> list[Credential]:
    matcher = ApiTokenCredentialMatcher()
    return [credential for credential in credentials if matcher.matches(credential)]
