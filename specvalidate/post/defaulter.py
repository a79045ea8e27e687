"""Filling in default values recorded by a validation."""

from __future__ import annotations

import copy
from typing import Any

from ..result import Result


def _schema_default(schema: Any) -> Any:
    if isinstance(schema, dict):
        return schema.get("default")
    return getattr(schema, "default", None)


def apply_defaults(result: Result) -> None:
    """Set missing fields of the validated data from their schemata's defaults.

    For each field, the first schema with a default wins.
    """
    for key, schemata in result.field_schemata().items():
        for schema in schemata:
            default = _schema_default(schema)
            if default is None:
                continue
            if key.field not in key.obj:
                key.obj[key.field] = copy.deepcopy(default)
                break