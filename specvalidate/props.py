"""Validation of the composition keywords of a schema: allOf, anyOf, oneOf, not, dependencies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .debug import debug_log
from .formats import DEFAULT_FORMATS, FormatRegistry
from .helpers import Kind
from .messages import (
    has_a_dependency_msg,
    must_not_validate_schema_msg,
    must_validate_all_schemas_msg,
    must_validate_at_least_one_schema_msg,
    must_validate_only_one_schema_msg,
)
from .options import SchemaValidatorOptions
from .result import Result


@dataclass
class SchemaPropsValidator:
    """Checks a value against the composition keywords of a schema.

    dependencies maps a property name either to a list of property names
    that must then be present, or to a schema the whole object must satisfy.
    """

    path: str = ""
    in_: str = ""
    all_of: Sequence[Any] = field(default_factory=list)
    one_of: Sequence[Any] = field(default_factory=list)
    any_of: Sequence[Any] = field(default_factory=list)
    not_: Any = None
    dependencies: Optional[Mapping[str, Any]] = None
    root: Any = None
    known_formats: FormatRegistry = field(default_factory=lambda: DEFAULT_FORMATS)
    options: SchemaValidatorOptions = field(default_factory=SchemaValidatorOptions)

    def __post_init__(self) -> None:
        self._any_of_validators = [self._new_validator(s) for s in self.any_of or ()]
        self._all_of_validators = [self._new_validator(s) for s in self.all_of or ()]
        self._one_of_validators = [self._new_validator(s) for s in self.one_of or ()]
        self._not_validator = self._new_validator(self.not_) if self.not_ is not None else None

    def _new_validator(self, schema: Any, path: Optional[str] = None) -> Any:
        from .schema import new_schema_validator

        return new_schema_validator(
            schema,
            self.root,
            self.path if path is None else path,
            self.known_formats,
            *self.options.options(),
        )

    def applies(self, source: Any, kind: Kind) -> bool:
        """True for any value described by a schema."""
        applies = isinstance(source, Mapping)
        debug_log(
            "schema props validator for %r applies %s for %s (kind: %s)",
            self.path,
            applies,
            type(source).__name__,
            kind,
        )
        return applies

    def _validate_any_of(self, data: Any, main: Result) -> Result:
        keep = Result()
        if not self._any_of_validators:
            return keep
        best: Optional[Result] = None
        first_success: Optional[Result] = None
        for validator in self._any_of_validators:
            result = validator.validate(data)
            keep.merge(result.keep_relevant_errors())
            if result.is_valid():
                best = None
                first_success = result
                keep = Result()
                break
            if best is None or result.match_count > best.match_count:
                best = result
        if first_success is None:
            main.add_errors(must_validate_at_least_one_schema_msg(self.path))
        if best is not None:
            main.merge(best)
        elif first_success is not None:
            main.merge(first_success)
        return keep

    def _validate_one_of(self, data: Any, main: Result) -> Result:
        keep = Result()
        if not self._one_of_validators:
            return keep
        best: Optional[Result] = None
        first_success: Optional[Result] = None
        validated = 0
        for validator in self._one_of_validators:
            result = validator.validate(data)
            keep.merge(result.keep_relevant_errors())
            if result.is_valid():
                validated += 1
                best = None
                if first_success is None:
                    first_success = result
                keep = Result()
                continue
            if validated == 0 and (best is None or result.match_count > best.match_count):
                best = result
        if validated != 1:
            if validated == 0:
                additional = "Found none valid"
            else:
                additional = f"Found {validated} valid alternatives"
            main.add_errors(must_validate_only_one_schema_msg(self.path, additional))
            if best is not None:
                main.merge(best)
        elif first_success is not None:
            main.merge(first_success)
        return keep

    def _validate_all_of(self, data: Any, main: Result) -> Result:
        keep = Result()
        if not self._all_of_validators:
            return keep
        validated = 0
        for validator in self._all_of_validators:
            result = validator.validate(data)
            keep.merge(result.keep_relevant_errors())
            if result.is_valid():
                validated += 1
            main.merge(result)
        if validated != len(self._all_of_validators):
            additional = ". None validated" if validated == 0 else ""
            main.add_errors(must_validate_all_schemas_msg(self.path, additional))
        return keep

    def _validate_dependencies(self, data: Any, main: Result) -> None:
        if not self.dependencies or not isinstance(data, Mapping):
            return
        for key in list(data):
            dependency = self.dependencies.get(key)
            if dependency is None:
                continue
            if isinstance(dependency, Mapping):
                validator = self._new_validator(dependency, f"{self.path}.{key}")
                main.merge(validator.validate(data))
                continue
            for dep_key in dependency:
                if dep_key not in data:
                    main.add_errors(has_a_dependency_msg(self.path, dep_key))

    def validate(self, data: Any) -> Result:
        """Validate data against the composition keywords and return the result."""
        main = Result()
        keep_any = self._validate_any_of(data, main)
        keep_one = self._validate_one_of(data, main)
        keep_all = self._validate_all_of(data, main)

        if self._not_validator is not None:
            if self._not_validator.validate(data).is_valid():
                main.add_errors(must_not_validate_schema_msg(self.path))

        self._validate_dependencies(data, main)

        main.inc()
        return main.merge(keep_all, keep_one, keep_any)