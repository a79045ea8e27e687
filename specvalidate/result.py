"""The outcome of a validation: errors, warnings, match count and schemata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .messages import CompositeError, ValidationError

IMPORTANT_PREFIX = "IMPORTANT!"


class FieldKey:
    """A pair of an object (by identity) and a field name, usable as a dict key."""

    __slots__ = ("_obj", "_field")

    def __init__(self, obj: Dict[str, Any], field_name: str) -> None:
        self._obj = obj
        self._field = field_name

    @property
    def obj(self) -> Dict[str, Any]:
        """The object holding the field."""
        return self._obj

    @property
    def field(self) -> str:
        """The name of the field."""
        return self._field

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldKey):
            return NotImplemented
        return self._obj is other._obj and self._field == other._field

    def __hash__(self) -> int:
        return hash((id(self._obj), self._field))

    def __repr__(self) -> str:
        return f"FieldKey(<object at {id(self._obj):#x}>, {self._field!r})"


class ItemKey:
    """A pair of a list (by identity) and an index, usable as a dict key."""

    __slots__ = ("_items", "_index")

    def __init__(self, items: List[Any], index: int) -> None:
        self._items = items
        self._index = index

    @property
    def items(self) -> List[Any]:
        """The list holding the item."""
        return self._items

    @property
    def index(self) -> int:
        """The position of the item."""
        return self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemKey):
            return NotImplemented
        return self._items is other._items and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._items), self._index))

    def __repr__(self) -> str:
        return f"ItemKey(<list at {id(self._items):#x}>, {self._index})"


_Entry = Tuple[Any, Any, List[Any]]


def _add_unique(target: List[BaseException], candidates: Iterable[Optional[BaseException]]) -> None:
    seen = {str(e) for e in target}
    for e in candidates:
        if e is None:
            continue
        text = str(e)
        if text not in seen:
            target.append(e)
            seen.add(text)


@dataclass
class Result:
    """Errors and warnings found while validating, plus the schemata that applied.

    match_count tells how many checks passed; it selects the most relevant
    branch when reporting anyOf or oneOf failures.
    """

    errors: List[BaseException] = field(default_factory=list)
    warnings: List[BaseException] = field(default_factory=list)
    match_count: int = 0
    data: Any = None
    _root_schemata: List[Any] = field(default_factory=list, repr=False, compare=False)
    _field_entries: List[_Entry] = field(default_factory=list, repr=False, compare=False)
    _item_entries: List[_Entry] = field(default_factory=list, repr=False, compare=False)
    _field_cache: Optional[Dict[FieldKey, List[Any]]] = field(
        default=None, repr=False, compare=False
    )
    _item_cache: Optional[Dict[ItemKey, List[Any]]] = field(
        default=None, repr=False, compare=False
    )

    def _reset_caches(self) -> None:
        self._field_cache = None
        self._item_cache = None

    def _merge_without_root_schemata(self, other: "Result") -> None:
        self._reset_caches()
        self.add_errors(*other.errors)
        self.add_warnings(*other.warnings)
        self.match_count += other.match_count
        self._field_entries.extend(other._field_entries)
        self._item_entries.extend(other._item_entries)

    def merge(self, *args: Optional["Result"]) -> "Result":
        """Merge other results into this one, keeping match counts and schemata."""
        for other in args:
            if other is None:
                continue
            self._merge_without_root_schemata(other)
            self._root_schemata.extend(other._root_schemata)
        return self

    def root_object_schemata(self) -> List[Any]:
        """The schemata which apply to the root object."""
        return list(self._root_schemata)

    def field_schemata(self) -> Dict[FieldKey, List[Any]]:
        """The schemata which apply to fields of objects."""
        if self._field_cache is None:
            cache: Dict[FieldKey, List[Any]] = {}
            for obj, name, schemata in self._field_entries:
                if schemata:
                    cache.setdefault(FieldKey(obj, name), []).extend(schemata)
            self._field_cache = cache
        return self._field_cache

    def item_schemata(self) -> Dict[ItemKey, List[Any]]:
        """The schemata which apply to items of lists."""
        if self._item_cache is None:
            cache: Dict[ItemKey, List[Any]] = {}
            for items, index, schemata in self._item_entries:
                if schemata:
                    cache.setdefault(ItemKey(items, index), []).extend(schemata)
            self._item_cache = cache
        return self._item_cache

    def merge_for_field(
        self, obj: Dict[str, Any], field: str, other: Optional["Result"]
    ) -> "Result":
        """Merge other, assigning its root schemata to a field of obj."""
        if other is None:
            return self
        self._merge_without_root_schemata(other)
        if other._root_schemata:
            self._field_entries.append((obj, field, list(other._root_schemata)))
        return self

    def merge_for_slice(
        self, items: List[Any], index: int, other: Optional["Result"]
    ) -> "Result":
        """Merge other, assigning its root schemata to an item of a list."""
        if other is None:
            return self
        self._merge_without_root_schemata(other)
        if other._root_schemata:
            self._item_entries.append((items, index, list(other._root_schemata)))
        return self

    def add_root_object_schemata(self, schema: Any) -> None:
        """Record a schema that applies to the root object."""
        self._root_schemata.append(schema)

    def add_property_schemata(self, obj: Dict[str, Any], field: str, schema: Any) -> None:
        """Record a schema that applies to a field of obj."""
        self._reset_caches()
        self._field_entries.append((obj, field, [schema]))

    def merge_as_errors(self, *args: Optional["Result"]) -> "Result":
        """Merge other results, turning their warnings into errors."""
        for other in args:
            if other is None:
                continue
            self._reset_caches()
            self.add_errors(*other.errors)
            self.add_errors(*other.warnings)
            self.match_count += other.match_count
        return self

    def merge_as_warnings(self, *args: Optional["Result"]) -> "Result":
        """Merge other results, turning their errors into warnings."""
        for other in args:
            if other is None:
                continue
            self._reset_caches()
            self.add_warnings(*other.errors)
            self.add_warnings(*other.warnings)
            self.match_count += other.match_count
        return self

    def add_errors(self, *args: Optional[BaseException]) -> None:
        """Add errors not already reported with the same message; None is skipped."""
        _add_unique(self.errors, args)

    def add_warnings(self, *args: Optional[BaseException]) -> None:
        """Add warnings not already reported with the same message; None is skipped."""
        _add_unique(self.warnings, args)

    def keep_relevant_errors(self) -> "Result":
        """A new result with only the messages tagged IMPORTANT!, tag removed."""

        def stripped(items: List[BaseException]) -> List[BaseException]:
            return [
                ValidationError(str(e)[len(IMPORTANT_PREFIX):])
                for e in items
                if str(e).startswith(IMPORTANT_PREFIX)
            ]

        return Result(errors=stripped(self.errors), warnings=stripped(self.warnings))

    def is_valid(self) -> bool:
        """True when there are no errors."""
        return not self.errors

    def has_errors(self) -> bool:
        """True when there are errors."""
        return not self.is_valid()

    def has_warnings(self) -> bool:
        """True when there are warnings."""
        return bool(self.warnings)

    def has_errors_or_warnings(self) -> bool:
        """True when there are errors or warnings."""
        return bool(self.errors) or bool(self.warnings)

    def inc(self) -> None:
        """Increment the match count."""
        self.match_count += 1

    def as_error(self) -> Optional[CompositeError]:
        """The errors as one composite error, or None when valid."""
        if self.is_valid():
            return None
        return CompositeError(self.errors)