"""Validation of JSON objects: properties, required fields and their schemata."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .debug import debug_log
from .formats import DEFAULT_FORMATS, FormatRegistry
from .helpers import (
    ARRAY_TYPE,
    JSON_DEFAULT,
    JSON_ITEMS,
    JSON_PROPERTIES,
    JSON_TYPE,
    SWAGGER_EXAMPLE,
    SWAGGER_EXAMPLES,
    Kind,
)
from .messages import (
    invalid_type,
    property_not_allowed,
    ref_not_allowed_in_header_msg,
    required,
    too_few_properties,
    too_many_properties,
)
from .options import SchemaValidatorOptions
from .result import Result
from .rexp import compile_regexp

_IGNORED_PROPERTIES = ("$schema", "id")


def _schema_get(schema: Any, key: str) -> Any:
    if isinstance(schema, Mapping):
        return schema.get(key)
    return getattr(schema, key, None)


def _pattern_matches(pattern: str, key: str) -> bool:
    try:
        return compile_regexp(pattern).search(key) is not None
    except re.error:
        return False


@dataclass
class ObjectValidator:
    """Checks an object's properties against the object keywords of a schema.

    additional_properties is None when absent, a bool, or a schema.
    """

    path: str = ""
    in_: str = ""
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    required: Sequence[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    additional_properties: Union[None, bool, Any] = None
    pattern_properties: Dict[str, Any] = field(default_factory=dict)
    root: Any = None
    known_formats: FormatRegistry = field(default_factory=lambda: DEFAULT_FORMATS)
    options: SchemaValidatorOptions = field(default_factory=SchemaValidatorOptions)

    def applies(self, source: Any, kind: Kind) -> bool:
        """True for an object value described by a schema."""
        applies = isinstance(source, Mapping) and kind in (Kind.MAP, Kind.STRUCT)
        debug_log(
            "object validator for %r applies %s for %s (kind: %s)",
            self.path,
            applies,
            type(source).__name__,
            kind,
        )
        return applies

    def _last_two(self) -> Tuple[Optional[str], Optional[str]]:
        parts = self.path.split(".")
        if len(parts) < 2:
            return None, None
        return parts[-1], parts[-2]

    def _is_properties(self) -> bool:
        last, before = self._last_two()
        return last == JSON_PROPERTIES and before != JSON_PROPERTIES

    def _is_default(self) -> bool:
        last, before = self._last_two()
        return last == JSON_DEFAULT and before != JSON_DEFAULT

    def _is_example(self) -> bool:
        last, before = self._last_two()
        return last in (SWAGGER_EXAMPLE, SWAGGER_EXAMPLES) and before != SWAGGER_EXAMPLE

    def _check_array_must_have_items(self, res: Result, val: Dict[str, Any]) -> None:
        if val.get(JSON_TYPE, None) == ARRAY_TYPE and JSON_ITEMS not in val:
            res.add_errors(required(JSON_ITEMS, self.path, None))

    def _check_items_must_be_type_array(self, res: Result, val: Dict[str, Any]) -> None:
        if self._is_properties() or self._is_default() or self._is_example():
            return
        if JSON_ITEMS not in val:
            return
        if JSON_TYPE in val:
            type_name = val[JSON_TYPE]
            if not isinstance(type_name, str) or type_name != ARRAY_TYPE:
                res.add_errors(invalid_type(self.path, self.in_, ARRAY_TYPE, None))
        else:
            res.add_errors(required(JSON_TYPE, self.path, None))

    def _precheck(self, res: Result, val: Dict[str, Any]) -> None:
        if self.options.enable_array_must_have_items_check:
            self._check_array_must_have_items(res, val)
        if self.options.enable_object_array_type_check:
            self._check_items_must_be_type_array(res, val)

    def _sub_validate(self, schema: Any, path: str, value: Any) -> Optional[Result]:
        from .schema import new_schema_validator

        validator = new_schema_validator(
            schema, self.root, path, self.known_formats, *self.options.options()
        )
        if validator is None:
            return Result(data=value)
        return validator.validate(value)

    def _additional_schema(self) -> Any:
        extra = self.additional_properties
        if extra is None or isinstance(extra, bool):
            return None
        return extra

    def _check_forbidden_headers(self, res: Result, headers: Any) -> None:
        if not isinstance(headers, Mapping):
            return
        for header_key, header_body in headers.items():
            if isinstance(header_body, Mapping) and "$ref" in header_body:
                ref = header_body["$ref"]
                msg = f', one may not use $ref=":{ref}"' if isinstance(ref, str) else ""
                res.add_errors(ref_not_allowed_in_header_msg(self.path, header_key, msg))

    def validate(self, data: Any) -> Result:
        """Validate an object (a dict) and return the result."""
        if not isinstance(data, dict):
            raise TypeError(f"object validation expects a dict, got {type(data).__name__}")
        val = data
        num_keys = len(val)

        if self.min_properties is not None and num_keys < self.min_properties:
            return Result(errors=[too_few_properties(self.path, self.in_, self.min_properties)])
        if self.max_properties is not None and num_keys > self.max_properties:
            return Result(errors=[too_many_properties(self.path, self.in_, self.max_properties)])

        res = Result()
        self._precheck(res, val)

        if self.additional_properties is False:
            for key in list(val):
                regular = key in self.properties
                matched = any(_pattern_matches(p, key) for p in self.pattern_properties)
                if regular or matched or key in _IGNORED_PROPERTIES:
                    continue
                res.add_errors(property_not_allowed(self.path, self.in_, key))
                if key == "headers" and val[key] is not None:
                    self._check_forbidden_headers(res, val[key])
        else:
            extra_schema = self._additional_schema()
            for key, value in list(val.items()):
                regular = key in self.properties
                matched, _, _ = self._validate_pattern_property(key, value, res)
                if not (regular or matched) and extra_schema is not None:
                    sub = self._sub_validate(extra_schema, f"{self.path}.{key}", value)
                    res.merge_for_field(val, key, sub)

        created_from_defaults = set()
        for name, schema in self.properties.items():
            property_path = f"{self.path}.{name}" if self.path else name
            if name in val:
                sub = self._sub_validate(schema, property_path, val[name])
                res.merge_for_field(val, name, sub)
            elif _schema_get(schema, "default") is not None:
                created_from_defaults.add(name)
                res.add_property_schemata(val, name, schema)

        for key in self.required or ():
            if key not in val and key not in created_from_defaults:
                res.add_errors(required(f"{self.path}.{key}", self.in_, None))

        for key, value in list(val.items()):
            regular = key in self.properties
            matched, _, patterns = self._validate_pattern_property(key, value, res)
            if regular or not matched:
                continue
            for pattern in patterns:
                schema = self.pattern_properties.get(pattern)
                if schema is not None:
                    sub = self._sub_validate(schema, f"{self.path}.{key}", value)
                    res.merge_for_field(val, key, sub)
        return res

    def _validate_pattern_property(
        self, key: str, value: Any, result: Result
    ) -> Tuple[bool, bool, List[str]]:
        patterns: List[str] = []
        for pattern, schema in self.pattern_properties.items():
            if _pattern_matches(pattern, key):
                patterns.append(pattern)
                result.merge(self._sub_validate(schema, f"{self.path}.{key}", value))
        return bool(patterns), False, patterns