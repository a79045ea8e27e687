"""Validation of JSON arrays against the array keywords of a schema."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from .formats import DEFAULT_FORMATS, FormatRegistry
from .helpers import Kind
from .messages import (
    array_does_not_allow_additional_items_msg,
    duplicate_items,
    too_few_items,
    too_many_items,
)
from .options import SchemaValidatorOptions
from .result import Result


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=repr)


def _has_duplicates(values: Sequence[Any]) -> bool:
    seen = set()
    for value in values:
        key = _canonical(value)
        if key in seen:
            return True
        seen.add(key)
    return False


@dataclass
class SchemaSliceValidator:
    """Checks an array's items, size and uniqueness.

    items is a single schema or a list of schemas; additional_items is
    None when absent, a bool, or a schema.
    """

    path: str = ""
    in_: str = ""
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False
    additional_items: Union[None, bool, Any] = None
    items: Any = None
    root: Any = None
    known_formats: FormatRegistry = field(default_factory=lambda: DEFAULT_FORMATS)
    options: SchemaValidatorOptions = field(default_factory=SchemaValidatorOptions)

    def applies(self, source: Any, kind: Kind) -> bool:
        """True for an array value described by a schema."""
        return isinstance(source, Mapping) and kind == Kind.SLICE

    def _item_schema(self) -> Any:
        if self.items is None or isinstance(self.items, (list, tuple)):
            return None
        return self.items

    def _item_schemas(self) -> List[Any]:
        if isinstance(self.items, (list, tuple)):
            return list(self.items)
        return []

    def _sub_validate(self, schema: Any, path: str, value: Any) -> Optional[Result]:
        from .schema import new_schema_validator

        validator = new_schema_validator(
            schema, self.root, path, self.known_formats, *self.options.options()
        )
        if validator is None:
            return Result(data=value)
        return validator.validate(value)

    def validate(self, data: Any) -> Result:
        """Validate an array (a list) and return the result."""
        result = Result()
        if data is None:
            return result
        if not isinstance(data, (list, tuple)):
            raise TypeError(f"array validation expects a list, got {type(data).__name__}")
        size = len(data)

        single = self._item_schema()
        if single is not None:
            for index, value in enumerate(data):
                sub = self._sub_validate(single, f"{self.path}.{index}", value)
                result.merge_for_slice(data, index, sub)

        schemas = self._item_schemas()
        for index, (schema, value) in enumerate(zip(schemas, data)):
            sub = self._sub_validate(schema, f"{self.path}.{index}", value)
            result.merge_for_slice(data, index, sub)

        items_size = len(schemas)
        if self.additional_items is not None and items_size < size:
            if schemas and self.additional_items is False:
                result.add_errors(array_does_not_allow_additional_items_msg())
            extra = self.additional_items
            if not isinstance(extra, bool):
                for index in range(items_size, size):
                    sub = self._sub_validate(extra, f"{self.path}.{index}", data[index])
                    result.merge_for_slice(data, index, sub)

        if self.min_items is not None and size < self.min_items:
            result.add_errors(too_few_items(self.path, self.in_, self.min_items, size))
        if self.max_items is not None and size > self.max_items:
            result.add_errors(too_many_items(self.path, self.in_, self.max_items, size))
        if self.unique_items and _has_duplicates(data):
            result.add_errors(duplicate_items(self.path, self.in_))
        result.inc()
        return result