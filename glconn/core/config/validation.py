"""Loading and validation of environment variables declared in ConfigSchema."""

import os
from typing import Any

from glconn.core.config.schema import ConfigSchema, EnvVarSpec

_CONVERTERS = {int: int, float: float, str: str}


class ConfigError(Exception):
    """Configuration validation error.

    Attributes:
        env_var: The environment variable name
        value: The raw value that failed validation
        message: Human-readable error message
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def load_env_var(spec: EnvVarSpec) -> Any:
    """Read one environment variable, converted and validated.

    Unset and empty variables yield the declared default, which is trusted
    as-is.

    Raises:
        ConfigError: If the value cannot be converted or fails validation
    """
    raw_value = os.environ.get(spec.name)
    if not raw_value:
        return spec.default

    convert = spec.coerce or _CONVERTERS[spec.type_hint]
    try:
        value = convert(raw_value)
    except (ValueError, TypeError) as e:
        raise ConfigError(spec.name, raw_value, f"Cannot convert to {spec.type_hint.__name__}: {e}") from e

    if spec.validator is not None and not spec.validator(value):
        raise ConfigError(spec.name, raw_value, spec.constraint or "Invalid value")
    return value


def validate_all() -> list[ConfigError]:
    """Validate every declared variable, collecting all errors.

    Used at startup so that every configuration problem is reported at once
    instead of failing on the first one.
    """
    errors: list[ConfigError] = []
    for spec in ConfigSchema.all_specs().values():
        try:
            load_env_var(spec)
        except ConfigError as e:
            errors.append(e)
    return errors
