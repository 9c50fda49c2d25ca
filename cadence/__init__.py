"""
Cadence - Fluent assertions for HTTP API tests

This package provides chainable, typed assertion nodes for values and
HTTP responses, with failure propagation between derived nodes.

Subpackages:
    - assertions: Assertion chain, results and the reporting pipeline
    - nodes: Typed assertion nodes (value, object, array, ...)
    - config: Session config and YAML loading
    - transport: HTTP client boundary (aiohttp)

Usage:
    from cadence import Expect, HttpRequest

    e = Expect.default("test_users", base_url="http://localhost:8000")

    e.array(["foo", 123]).element(0).string().has_prefix("f")

    resp = await e.send(HttpRequest("GET", "/users"))
    resp.status(200).json().array().not_empty()
"""

__version__ = "0.1.0"

# Canonical values
from .canonical import CanonicalizationError, canonicalize, equal, normalize

# Environment
from .environment import BoundEnvironment, Environment, load_environment

# Re-export assertions for convenience
from .assertions import (
    # Models
    AssertionResult,
    AssertionType,
    AssertionValue,
    # Chain
    Chain,
    # Pipeline
    AssertionHandler,
    DefaultAssertionHandler,
    DefaultFormatter,
    Formatter,
    CollectingReporter,
    ExpectationFailed,
    FatalReporter,
    Logger,
    Reporter,
    StdLogger,
)

# Re-export config for convenience
from .config import (
    AuthConfig,
    AuthType,
    Config,
    ConfigError,
    ValidationError,
    ValidationResult,
    load_config,
    validate_config_yaml,
)

# Re-export nodes for convenience
from .nodes import (
    Array,
    Boolean,
    Node,
    Number,
    Object,
    Response,
    StatusRange,
    String,
    Value,
)

# Re-export transport for convenience
from .transport import (
    AiohttpClient,
    BaseClient,
    HttpRequest,
    HttpResponse,
    TransportError,
    TransportErrorCode,
)

# Session
from .expect import Expect

__all__ = [
    # Package info
    "__version__",
    # Session
    "Expect",
    # Canonical values
    "normalize",
    "canonicalize",
    "equal",
    "CanonicalizationError",
    # Environment
    "Environment",
    "BoundEnvironment",
    "load_environment",
    # Assertions - Models
    "AssertionResult",
    "AssertionType",
    "AssertionValue",
    # Assertions - Chain
    "Chain",
    # Assertions - Pipeline
    "AssertionHandler",
    "DefaultAssertionHandler",
    "Formatter",
    "DefaultFormatter",
    "Reporter",
    "FatalReporter",
    "CollectingReporter",
    "ExpectationFailed",
    "Logger",
    "StdLogger",
    # Config
    "Config",
    "ConfigError",
    "AuthConfig",
    "AuthType",
    "ValidationResult",
    "ValidationError",
    "load_config",
    "validate_config_yaml",
    # Nodes
    "Node",
    "Value",
    "Object",
    "Array",
    "String",
    "Number",
    "Boolean",
    "Response",
    "StatusRange",
    # Transport
    "BaseClient",
    "AiohttpClient",
    "HttpRequest",
    "HttpResponse",
    "TransportError",
    "TransportErrorCode",
]
