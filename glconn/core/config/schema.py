"""Declarative schema for environment variable configuration.

Every environment variable the service reads is declared here once, with
its default, target type and validation rule. ``glconn config env`` renders
the schema as documentation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from glconn.core.logging import VALID_LEVELS


def _log_level(value: str) -> str:
    # Tolerate trailing comments such as "INFO  # default"
    words = value.split()
    if not words:
        raise ValueError("empty log level")
    return words[0].upper()


@dataclass(frozen=True)
class EnvVarSpec:
    """Declaration of a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Value used when the variable is unset or empty
        type_hint: Target type (int, float or str)
        description: Human-readable description for docs
        validator: Optional check applied to the converted value
        constraint: Rule enforced by ``validator``, shown in errors and docs
        coerce: Optional converter replacing the plain ``type_hint`` call
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    constraint: str = ""
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=8090,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
        constraint="must be between 1 and 65535",
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level; only the first word is read",
        validator=lambda x: x in VALID_LEVELS,
        constraint="must be one of " + ", ".join(VALID_LEVELS),
        coerce=_log_level,
    )

    # === Storage Settings ===

    GLCONN_HOME = EnvVarSpec(
        name="GLCONN_HOME",
        default="~/.glconn",
        type_hint=str,
        description="Directory holding the connections and credentials files",
    )

    GLCONN_CONNECTIONS_FILE = EnvVarSpec(
        name="GLCONN_CONNECTIONS_FILE",
        default=None,
        type_hint=str,
        description="Path of the persisted connection profiles (default: $GLCONN_HOME/connections.json)",
    )

    GLCONN_CREDENTIALS_FILE = EnvVarSpec(
        name="GLCONN_CREDENTIALS_FILE",
        default=None,
        type_hint=str,
        description="Path of the credential store (default: $GLCONN_HOME/credentials.json)",
    )

    # === Client Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=10.0,
        type_hint=float,
        description="Read timeout in seconds for GitLab API requests",
        validator=lambda x: x > 0,
        constraint="must be positive",
    )

    CONNECT_TIMEOUT = EnvVarSpec(
        name="CONNECT_TIMEOUT",
        default=5.0,
        type_hint=float,
        description="Connect timeout in seconds for GitLab API requests",
        validator=lambda x: x > 0,
        constraint="must be positive",
    )

    # === Security Settings ===

    ADMIN_API_KEY = EnvVarSpec(
        name="ADMIN_API_KEY",
        default=None,
        type_hint=str,
        description="Optional key required to change or test connections over HTTP",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Return all environment variable specs keyed by variable name."""
        return {
            value.name: value
            for value in vars(cls).values()
            if isinstance(value, EnvVarSpec)
        }

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Render the schema as a markdown table."""
        lines = [
            "| Variable | Default | Type | Description |",
            "|----------|---------|------|-------------|",
        ]
        for name, spec in sorted(cls.all_specs().items()):
            default = "(unset)" if spec.default is None else f"`{spec.default}`"
            description = spec.description
            if spec.constraint:
                description += f" ({spec.constraint})"
            lines.append(f"| `{name}` | {default} | {spec.type_hint.__name__} | {description} |")
        return "\n".join(lines)
