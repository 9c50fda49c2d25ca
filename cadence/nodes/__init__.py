"""
Assertion nodes.

Each node wraps one value and the chain its checks report through.
Navigation methods (value(), element(), path(), ...) return new nodes
whose chains are spawned from the parent's.

Usage:
    from cadence import Expect

    e = Expect.default("test_user")
    user = e.object({"id": 1, "name": "alice"})
    user.value("id").number().is_equal(1)
    user.value("name").string().has_prefix("al")
"""

# Base
from .base import Node

# Typed nodes
from .array import Array
from .boolean import Boolean
from .number import Number
from .object import Object
from .string import String
from .value import Value, type_name

# HTTP
from .response import Response, StatusRange, status_range_of

__all__ = [
    # Base
    "Node",
    # Typed nodes
    "Value",
    "Object",
    "Array",
    "String",
    "Number",
    "Boolean",
    "type_name",
    # HTTP
    "Response",
    "StatusRange",
    "status_range_of",
]
