"""Options for spec validation and for schema validation."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Callable, List


@dataclass
class Opts:
    """Options of a spec validator.

    continue_on_errors keeps reporting errors once the spec is known invalid.
    strict_path_param_uniqueness treats paths differing only by parameter
    names as duplicates, e.g. GET /pets/{id} and GET /pets/{pet}.
    """

    continue_on_errors: bool = False
    strict_path_param_uniqueness: bool = True


_default_opts = Opts()
_default_opts_lock = threading.Lock()


def set_continue_on_errors(c: bool) -> None:
    """Set the global default for continuing to report errors on an invalid spec."""
    with _default_opts_lock:
        _default_opts.continue_on_errors = bool(c)


def default_opts() -> Opts:
    """Return a copy of the current global default options."""
    with _default_opts_lock:
        return dataclasses.replace(_default_opts)


@dataclass
class SchemaValidatorOptions:
    """Optional rules applied when validating data against a schema."""

    enable_object_array_type_check: bool = False
    enable_array_must_have_items_check: bool = False

    def options(self) -> List[Option]:
        """Return setters that reproduce these options."""
        return [
            enable_object_array_type_check(self.enable_object_array_type_check),
            enable_array_must_have_items_check(self.enable_array_must_have_items_check),
        ]


Option = Callable[[SchemaValidatorOptions], None]


def enable_object_array_type_check(enable: bool) -> Option:
    """Swagger rule: an object with items must be of type array."""

    def setter(opts: SchemaValidatorOptions) -> None:
        opts.enable_object_array_type_check = enable

    return setter


def enable_array_must_have_items_check(enable: bool) -> Option:
    """Swagger rule: an array must have items defined."""

    def setter(opts: SchemaValidatorOptions) -> None:
        opts.enable_array_must_have_items_check = enable

    return setter


def swagger_schema(enable: bool) -> Option:
    """Turn all swagger schema rules on or off."""

    def setter(opts: SchemaValidatorOptions) -> None:
        opts.enable_object_array_type_check = enable
        opts.enable_array_must_have_items_check = enable

    return setter