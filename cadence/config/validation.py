"""
Validation for session config files.

This module checks raw parsed YAML against the config schema and
reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import AuthType


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "auth.token"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of config validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Config validation passed"
        lines = [f"Config validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Config Validator
# ─────────────────────────────────────────────────────────────────────────────

class ConfigValidator:
    """Validates raw parsed YAML against the config schema."""

    REQUIRED_TOP_LEVEL = {"version"}
    OPTIONAL_TOP_LEVEL = {"name", "base_url", "timeout_ms", "headers", "auth", "env"}
    VALID_AUTH_TYPES = {t.value for t in AuthType}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_base_url()
        self._validate_timeout()
        self._validate_headers()
        self._validate_env()

        auth = self.data.get("auth")
        if auth is not None:
            self._validate_auth(auth)

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your config file"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        if "name" not in self.data:
            return
        name = self.data["name"]
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Provide the test name shown in failure messages"
            )

    def _validate_base_url(self) -> None:
        if "base_url" not in self.data:
            return
        url = self.data["base_url"]
        if not isinstance(url, str):
            self.result.add_error(
                "base_url",
                "Must be a string",
                value=url
            )
        elif not (url.startswith("http://") or url.startswith("https://")):
            self.result.add_error(
                "base_url",
                "Must be a valid HTTP(S) URL",
                value=url,
                suggestion="URL should start with 'http://' or 'https://'"
            )

    def _validate_timeout(self) -> None:
        timeout = self.data.get("timeout_ms")
        if timeout is None:
            return
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout < 0:
            self.result.add_error(
                "timeout_ms",
                "Must be a non-negative integer (milliseconds)",
                value=timeout
            )

    def _validate_headers(self) -> None:
        headers = self.data.get("headers")
        if headers is None:
            return
        if not isinstance(headers, dict):
            self.result.add_error(
                "headers",
                "Must be an object (header name to value)",
                value=headers
            )
            return
        for name, value in headers.items():
            if not isinstance(value, str):
                self.result.add_error(
                    f"headers.{name}",
                    "Header value must be a string",
                    value=value,
                    suggestion="Quote numeric header values"
                )

    def _validate_env(self) -> None:
        env = self.data.get("env")
        if env is None:
            return
        if not isinstance(env, dict):
            self.result.add_error(
                "env",
                "Must be an object (key-value pairs)",
                value=env
            )

    def _validate_auth(self, auth: Any) -> None:
        """Validate auth configuration for the default HTTP client."""
        if not isinstance(auth, dict):
            self.result.add_error(
                "auth",
                "Must be an object",
                value=auth
            )
            return

        auth_type = auth.get("type")
        if auth_type not in self.VALID_AUTH_TYPES:
            self.result.add_error(
                "auth.type",
                "Invalid auth type",
                value=auth_type,
                suggestion=f"Valid types: {', '.join(sorted(self.VALID_AUTH_TYPES))}"
            )
            return

        if auth_type == "bearer":
            self._require_string(auth, "token", "bearer")

        elif auth_type == "api_key":
            self._require_string(auth, "key", "api_key")
            header = auth.get("header")
            if header is not None and not isinstance(header, str):
                self.result.add_error(
                    "auth.header",
                    "Must be a string",
                    value=header,
                    suggestion="Default is 'X-API-Key'"
                )

        elif auth_type == "basic":
            self._require_string(auth, "username", "basic")
            self._require_string(auth, "password", "basic")

    def _require_string(self, auth: dict[str, Any], key: str, auth_type: str) -> None:
        value = auth.get(key)
        if not value:
            self.result.add_error(
                f"auth.{key}",
                f"Required for {auth_type} auth",
                suggestion=f"Add '{key}: \"...\"' to the auth block"
            )
        elif not isinstance(value, str):
            self.result.add_error(
                f"auth.{key}",
                "Must be a string",
                value=value
            )
