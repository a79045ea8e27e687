"""Registry of string formats and the validator checking them."""

from __future__ import annotations

import base64
import binascii
import datetime
import ipaddress
import re
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .debug import debug_log
from .helpers import Kind
from .messages import INVALID_TYPE_CODE, ValidationError, invalid_type
from .result import Result

Checker = Callable[[str], bool]


def _normalize(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


class FormatRegistry:
    """Named string formats, each with a checker telling valid values.

    Names are matched ignoring case, dashes and underscores, so that
    date-time and datetime are the same format.
    """

    def __init__(self) -> None:
        self._checkers: Dict[str, Checker] = {}

    def add(self, name: str, checker: Checker) -> bool:
        """Register a format; True when the name was not known before."""
        key = _normalize(name)
        is_new = key not in self._checkers
        self._checkers[key] = checker
        return is_new

    def contains_name(self, name: str) -> bool:
        """True when a format of that name is registered."""
        return _normalize(name) in self._checkers

    def validates(self, name: str, value: str) -> bool:
        """True when value is valid for the named format; False if unknown."""
        checker = self._checkers.get(_normalize(name))
        if checker is None:
            return False
        try:
            return bool(checker(value))
        except (ValueError, TypeError):
            return False

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains_name(name)


_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DATE_TIME = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?"
    r"(?:[Zz]|[+-](\d{2}):?(\d{2}))?$"
)
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")
_HOSTNAME_LABEL = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")
_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_UUID_VERSIONED = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-(\d)[0-9a-fA-F]{3}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")
_MAC = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}$")
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
_SSN = re.compile(r"^\d{3}[- ]?\d{2}[- ]?\d{4}$")
_DURATION = re.compile(
    r"^(\s*[-+]?\d+(\.\d+)?\s*"
    r"(ns|us|µs|ms|s|sec|secs|second|seconds|m|min|mins|minute|minutes|"
    r"h|hr|hrs|hour|hours|d|day|days|w|wk|wks|week|weeks))+\s*$"
)


def _is_date(value: str) -> bool:
    if not _DATE.match(value):
        return False
    datetime.date.fromisoformat(value)
    return True


def _is_date_time(value: str) -> bool:
    match = _DATE_TIME.match(value)
    if not match:
        return False
    datetime.date.fromisoformat(match.group(1))
    hour, minute = int(match.group(2)), int(match.group(3))
    second = int(match.group(4) or 0)
    if hour > 23 or minute > 59 or second > 60:
        return False
    if match.group(5) is not None and (int(match.group(5)) > 23 or int(match.group(6)) > 59):
        return False
    return True


def _is_hostname(value: str) -> bool:
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > 255:
        return False
    return all(_HOSTNAME_LABEL.match(label) for label in host.split("."))


def _is_ipv4(value: str) -> bool:
    ipaddress.IPv4Address(value)
    return True


def _is_ipv6(value: str) -> bool:
    ipaddress.IPv6Address(value)
    return True


def _is_uri(value: str) -> bool:
    if not value or any(c.isspace() for c in value):
        return False
    parsed = urllib.parse.urlparse(value)
    return bool(parsed.scheme) or value.startswith("/")


def _is_byte(value: str) -> bool:
    try:
        base64.b64decode(value, validate=True)
    except binascii.Error:
        return False
    return True


def _versioned_uuid(version: str) -> Checker:
    def check(value: str) -> bool:
        match = _UUID_VERSIONED.match(value)
        return bool(match) and match.group(1) == version

    return check


def _digits(value: str) -> str:
    return value.replace("-", "").replace(" ", "")


def _is_isbn10(value: str) -> bool:
    digits = _digits(value)
    if not re.fullmatch(r"\d{9}[\dXx]", digits):
        return False
    total = sum((10 - i) * (10 if c in "Xx" else int(c)) for i, c in enumerate(digits))
    return total % 11 == 0


def _is_isbn13(value: str) -> bool:
    digits = _digits(value)
    if not re.fullmatch(r"\d{13}", digits):
        return False
    total = sum(int(c) * (3 if i % 2 else 1) for i, c in enumerate(digits))
    return total % 10 == 0


def _is_credit_card(value: str) -> bool:
    digits = _digits(value)
    if not re.fullmatch(r"\d{12,19}", digits):
        return False
    total = 0
    for position, char in enumerate(reversed(digits)):
        number = int(char)
        if position % 2:
            number *= 2
            if number > 9:
                number -= 9
        total += number
    return total % 10 == 0


def _is_rgb_color(value: str) -> bool:
    match = _RGB_COLOR.match(value)
    return bool(match) and all(int(g) <= 255 for g in match.groups())


def _matches(pattern: "re.Pattern[str]") -> Checker:
    return lambda value: bool(pattern.match(value))


def _build_default_registry() -> FormatRegistry:
    registry = FormatRegistry()
    registry.add("date", _is_date)
    registry.add("date-time", _is_date_time)
    registry.add("password", lambda value: True)
    registry.add("byte", _is_byte)
    registry.add("creditcard", _is_credit_card)
    registry.add("duration", _matches(_DURATION))
    registry.add("email", _matches(_EMAIL))
    registry.add("hexcolor", _matches(_HEX_COLOR))
    registry.add("hostname", _is_hostname)
    registry.add("ipv4", _is_ipv4)
    registry.add("ipv6", _is_ipv6)
    registry.add("isbn", lambda value: _is_isbn10(value) or _is_isbn13(value))
    registry.add("isbn10", _is_isbn10)
    registry.add("isbn13", _is_isbn13)
    registry.add("mac", _matches(_MAC))
    registry.add("bsonobjectid", _matches(_OBJECT_ID))
    registry.add("rgbcolor", _is_rgb_color)
    registry.add("ssn", _matches(_SSN))
    registry.add("uri", _is_uri)
    registry.add("uuid", _matches(_UUID))
    registry.add("uuid3", _versioned_uuid("3"))
    registry.add("uuid4", _versioned_uuid("4"))
    registry.add("uuid5", _versioned_uuid("5"))
    return registry


DEFAULT_FORMATS = _build_default_registry()


def format_of(
    path: str,
    in_: str,
    format_name: str,
    value: str,
    registry: Optional[FormatRegistry] = None,
) -> Optional[ValidationError]:
    """Check value against a named format; the error found, or None when valid."""
    formats = registry if registry is not None else DEFAULT_FORMATS
    if not formats.contains_name(format_name):
        return ValidationError(
            f"{format_name} is an invalid type name",
            code=INVALID_TYPE_CODE,
            name=format_name,
        )
    if not formats.validates(format_name, value):
        return invalid_type(path, in_, format_name, value)
    return None


def _source_format(source: Any) -> Optional[str]:
    if source is None or isinstance(source, (str, bytes)):
        return None
    if isinstance(source, Mapping):
        found = source.get("format")
    else:
        found = getattr(source, "format", None)
    return found if isinstance(found, str) else None


@dataclass
class FormatValidator:
    """Checks string values against a named format."""

    format: str = ""
    path: str = ""
    in_: str = ""
    known_formats: FormatRegistry = field(default_factory=lambda: DEFAULT_FORMATS)

    def applies(self, source: Any, kind: Kind) -> bool:
        """True for a string value described by a source with a known format."""
        fmt = _source_format(source)
        applies = fmt is not None and kind == Kind.STRING and self.known_formats.contains_name(fmt)
        debug_log(
            "format validator for %r applies %s for %s (kind: %s)",
            self.path,
            applies,
            type(source).__name__,
            kind,
        )
        return applies

    def validate(self, val: Any) -> Optional[Result]:
        """A result holding the format error, or None when the value is valid."""
        if not isinstance(val, str):
            raise TypeError(f"format validation expects a string, got {type(val).__name__}")
        debug_log('validating "%s" against format: %s', val, self.format)
        result = Result()
        result.add_errors(format_of(self.path, self.in_, self.format, val, self.known_formats))
        return result if result.has_errors() else None