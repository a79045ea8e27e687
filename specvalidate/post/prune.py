"""Removing fields that no schema describes."""

from __future__ import annotations

from typing import Any, Dict

from ..result import FieldKey, Result


def prune(result: Result) -> None:
    """Recursively remove from the validated data every field without a schema."""
    _prune(result.data, result)


def _prune(data: Any, result: Result) -> None:
    if isinstance(data, dict):
        _prune_object(data, result)
        for value in data.values():
            _prune(value, result)
    elif isinstance(data, list):
        for item in data:
            _prune(item, result)


def _prune_object(obj: Dict[str, Any], result: Result) -> None:
    fields = result.field_schemata()
    for name in list(obj):
        if not fields.get(FieldKey(obj, name)):
            del obj[name]