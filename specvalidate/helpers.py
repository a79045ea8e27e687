"""Shared helpers: value kinds, number conversions, path parsing and messages."""

from __future__ import annotations

import enum
import math
import numbers
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from .messages import cannot_resolve_ref_msg
from .result import Result
from .rexp import must_compile_regexp

SWAGGER_BODY = "body"
SWAGGER_EXAMPLE = "example"
SWAGGER_EXAMPLES = "examples"

OBJECT_TYPE = "object"
ARRAY_TYPE = "array"
STRING_TYPE = "string"
INTEGER_TYPE = "integer"
NUMBER_TYPE = "number"
BOOLEAN_TYPE = "boolean"
FILE_TYPE = "file"
NULL_TYPE = "null"

JSON_PROPERTIES = "properties"
JSON_ITEMS = "items"
JSON_TYPE = "type"
JSON_DEFAULT = "default"

STRING_FORMAT_DATE = "date"
STRING_FORMAT_DATE_TIME = "date-time"
STRING_FORMAT_PASSWORD = "password"
STRING_FORMAT_BYTE = "byte"
STRING_FORMAT_CREDIT_CARD = "creditcard"
STRING_FORMAT_DURATION = "duration"
STRING_FORMAT_EMAIL = "email"
STRING_FORMAT_HEX_COLOR = "hexcolor"
STRING_FORMAT_HOSTNAME = "hostname"
STRING_FORMAT_IPV4 = "ipv4"
STRING_FORMAT_IPV6 = "ipv6"
STRING_FORMAT_ISBN = "isbn"
STRING_FORMAT_ISBN10 = "isbn10"
STRING_FORMAT_ISBN13 = "isbn13"
STRING_FORMAT_MAC = "mac"
STRING_FORMAT_BSON_OBJECT_ID = "bsonobjectid"
STRING_FORMAT_RGB_COLOR = "rgbcolor"
STRING_FORMAT_SSN = "ssn"
STRING_FORMAT_URI = "uri"
STRING_FORMAT_UUID = "uuid"
STRING_FORMAT_UUID3 = "uuid3"
STRING_FORMAT_UUID4 = "uuid4"
STRING_FORMAT_UUID5 = "uuid5"

INTEGER_FORMAT_INT32 = "int32"
INTEGER_FORMAT_INT64 = "int64"
INTEGER_FORMAT_UINT32 = "uint32"
INTEGER_FORMAT_UINT64 = "uint64"

NUMBER_FORMAT_FLOAT32 = "float32"
NUMBER_FORMAT_FLOAT64 = "float64"
NUMBER_FORMAT_FLOAT = "float"
NUMBER_FORMAT_DOUBLE = "double"

_PATH_PARAM = r"\{[^{}]+?\}"
_UINT64_RANGE = 1 << 64
_INT64_HALF = 1 << 63


class Kind(enum.Enum):
    """The broad nature of a value being validated."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    SLICE = "slice"
    MAP = "map"
    STRUCT = "struct"


def kind_of(value: Any) -> Kind:
    """Classify a value into a Kind."""
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, numbers.Integral):
        return Kind.INT
    if isinstance(value, numbers.Real):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, (list, tuple)):
        return Kind.SLICE
    return Kind.STRUCT


def strip_parameters_in_path(path: str) -> str:
    """Replace every path parameter with X, segment by segment.

    A parameter spanning a slash, as in /a{/b}, is left alone.
    """
    rex = must_compile_regexp(_PATH_PARAM)
    return "/".join(rex.sub("X", segment) for segment in path.split("/"))


def extract_path_params(path: str) -> List[str]:
    """All parameters of a path, with their surrounding braces."""
    rex = must_compile_regexp(_PATH_PARAM)
    return [match for segment in path.split("/") for match in rex.findall(segment)]


def _as_integer(val: Any) -> Optional[int]:
    if isinstance(val, bool):
        return None
    if isinstance(val, numbers.Integral):
        return int(val)
    if isinstance(val, numbers.Real):
        number = float(val)
        if not math.isfinite(number):
            return None
        return int(number)
    return None


def as_int64(val: Any) -> int:
    """Convert a number to a signed 64-bit integer, truncating; 0 for non-numbers."""
    number = _as_integer(val)
    if number is None:
        return 0
    return (number + _INT64_HALF) % _UINT64_RANGE - _INT64_HALF


def as_uint64(val: Any) -> int:
    """Convert a number to an unsigned 64-bit integer, truncating; 0 for non-numbers."""
    number = _as_integer(val)
    if number is None:
        return 0
    return number % _UINT64_RANGE


def as_float64(val: Any) -> float:
    """Convert a number to a float; 0.0 for non-numbers."""
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        return 0.0
    return float(val)


def add_pointer_error(res: Result, err: Any, ref: str, from_path: str) -> Result:
    """Report an unresolved reference into res, when err is set, and return res."""
    if err is not None:
        res.add_errors(cannot_resolve_ref_msg(from_path, ref, err))
    return res


def response_msg_variants(response_type: str, response_code: int) -> Tuple[str, str]:
    """The name of a response for messages, and its code as used in paths."""
    if response_type == JSON_DEFAULT:
        return "default response", JSON_DEFAULT
    code = str(response_code)
    return "response " + code, code