"""
Config loader.

This module provides the public API for loading and validating session
config files from disk or YAML strings.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from ..environment import Environment
from .models import AuthConfig, AuthType, Config, DEFAULT_TIMEOUT_MS
from .validation import ConfigValidator, ValidationResult

# {{env.KEY}} placeholders in string settings
ENV_PATTERN = re.compile(r"\{\{env\.(\w+)\}\}")


def load_config(path: str | Path, **overrides: Any) -> tuple[Config | None, ValidationResult]:
    """
    Load and validate a config from a YAML file.

    Args:
        path: Path to the YAML config file
        **overrides: Config fields to set on top of the file, typically
            reporter, assertion_handler or client

    Returns:
        Tuple of (Config or None, ValidationResult)
        If validation fails, Config will be None.

    Example:
        config, result = load_config("cadence.yaml", reporter=FatalReporter())
        if not result.is_valid:
            print(result)
            sys.exit(1)
        e = Expect(config)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    return _load_data(data, str(path), overrides)


def validate_config_yaml(yaml_string: str, **overrides: Any) -> tuple[Config | None, ValidationResult]:
    """
    Validate a config from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string
        **overrides: Config fields to set on top of the parsed values

    Returns:
        Tuple of (Config or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _load_data(data, "yaml", overrides)


def _load_data(data: Any, source: str, overrides: dict[str, Any]) -> tuple[Config | None, ValidationResult]:
    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = ConfigValidator(data)
    result = validator.validate()

    if not result.is_valid:
        return None, result

    return parse_config(data, **overrides), result


def parse_config(data: dict[str, Any], **overrides: Any) -> Config:
    """
    Convert validated YAML data to a Config, then apply overrides.

    `{{env.KEY}}` placeholders in base_url, headers and auth are replaced
    with values from the `env:` block. Unknown keys are left in place.
    """
    env = {str(k): v for k, v in (data.get("env") or {}).items()}
    values: dict[str, Any] = {
        "test_name": data.get("name", ""),
        "base_url": interpolate(data.get("base_url", ""), env),
        "timeout_ms": data.get("timeout_ms", DEFAULT_TIMEOUT_MS),
        "headers": interpolate(dict(data.get("headers") or {}), env),
        "auth": _parse_auth(interpolate(data.get("auth"), env)),
        "environment": Environment(env),
    }
    values.update(overrides)
    return Config(**values)


def interpolate(value: Any, env: dict[str, Any]) -> Any:
    """Interpolate {{env.KEY}} placeholders in a value."""
    if isinstance(value, str):
        def replace_env(match: re.Match) -> str:
            var_name = match.group(1)
            return str(env.get(var_name, match.group(0)))
        return ENV_PATTERN.sub(replace_env, value)
    elif isinstance(value, dict):
        return {k: interpolate(v, env) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate(v, env) for v in value]
    return value


def _parse_auth(auth_data: dict | None) -> AuthConfig | None:
    """Parse auth configuration if present."""
    if auth_data is None:
        return None

    return AuthConfig(
        type=AuthType(auth_data["type"]),
        token=auth_data.get("token"),
        header=auth_data.get("header", "X-API-Key"),
        key=auth_data.get("key"),
        username=auth_data.get("username"),
        password=auth_data.get("password"),
    )
