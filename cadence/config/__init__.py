"""
Session Configuration

This package provides the Config dataclass an Expect session is built
from, plus tools for loading it from a YAML file.

Usage:
    from cadence.config import load_config, validate_config_yaml

    # Load from file
    config, result = load_config("cadence.yaml", reporter=FatalReporter())
    if not result.is_valid:
        print(result)

    # Or validate from string
    config, result = validate_config_yaml(yaml_string)
"""

# Public API
from .loader import interpolate, load_config, parse_config, validate_config_yaml

# Models
from .models import AuthConfig, AuthType, Config, ConfigError

# Validation
from .validation import ConfigValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_config",
    "parse_config",
    "validate_config_yaml",
    "interpolate",
    # Models
    "Config",
    "ConfigError",
    "AuthConfig",
    "AuthType",
    # Validation
    "ValidationResult",
    "ValidationError",
    "ConfigValidator",
]
