"""Tagging a validation context with the kind of operation being validated."""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

OPERATION_TYPE_KEY = "operationTypeKey"


class OperationType(str, enum.Enum):
    """Whether a request or a response is validated."""

    REQUEST = "request"
    RESPONSE = "response"
    NONE = "none"


def _with_operation(
    ctx: Optional[Mapping[str, Any]], operation: OperationType
) -> Mapping[str, Any]:
    values = dict(ctx or {})
    values[OPERATION_TYPE_KEY] = operation
    return MappingProxyType(values)


def with_operation_request(ctx: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    """Return a new context marked as validating a request."""
    return _with_operation(ctx, OperationType.REQUEST)


def with_operation_response(ctx: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    """Return a new context marked as validating a response."""
    return _with_operation(ctx, OperationType.RESPONSE)


def extract_operation_type(ctx: Optional[Mapping[str, Any]]) -> OperationType:
    """Read the operation type from a context, NONE when absent or unknown."""
    if not ctx:
        return OperationType.NONE
    value = ctx.get(OPERATION_TYPE_KEY)
    if not isinstance(value, OperationType):
        return OperationType.NONE
    return value