"""
Assertion chain and reporting pipeline.

This package provides the failure-propagation core shared by every node
and the pluggable pipeline that turns results into test failures.

Components:
    - AssertionResult: structured outcome of one check
    - Chain: scope breadcrumb + monotonic failed flag + handler gate
    - Formatter / DefaultFormatter: render results as text
    - Reporter / FatalReporter / CollectingReporter: deliver failures
    - Logger / StdLogger: optional success logging
    - AssertionHandler / DefaultAssertionHandler: receive every result

Usage:
    from cadence.assertions import DefaultAssertionHandler, FatalReporter

    handler = DefaultAssertionHandler(FatalReporter())
"""

# Models
from .models import AssertionResult, AssertionType, AssertionValue

# Chain
from .chain import Chain

# Pipeline
from .formatter import DefaultFormatter, Formatter
from .handler import AssertionHandler, DefaultAssertionHandler
from .reporters import (
    CollectingReporter,
    ExpectationFailed,
    FatalReporter,
    Logger,
    Reporter,
    StdLogger,
)

__all__ = [
    # Models
    "AssertionResult",
    "AssertionType",
    "AssertionValue",
    # Chain
    "Chain",
    # Formatter
    "Formatter",
    "DefaultFormatter",
    # Handler
    "AssertionHandler",
    "DefaultAssertionHandler",
    # Reporters
    "Reporter",
    "FatalReporter",
    "CollectingReporter",
    "ExpectationFailed",
    "Logger",
    "StdLogger",
]
