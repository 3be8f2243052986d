from glconn.core.connection.cache import ClientCache
from glconn.core.connection.profile import ConnectionProfile
from glconn.core.connection.registry import ConnectionRegistry
from glconn.core.connection.service import ConnectionConfigService, CredentialOption
from glconn.core.connection.validation import FormValidation

__all__ = [
    "ClientCache",
    "ConnectionConfigService",
    "ConnectionProfile",
    "ConnectionRegistry",
    "CredentialOption",
    "FormValidation",
]
