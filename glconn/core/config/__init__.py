from glconn.core.config.config import Config
from glconn.core.config.validation import ConfigError, validate_all

__all__ = ["Config", "ConfigError", "validate_all"]
