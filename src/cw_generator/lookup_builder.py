"""
LookupIndex and LookupBuilder - O(1) foreign-key and natural-key lookups.

Generators index upstream collections once instead of scanning them per
record.

Before (O(N) per lookup):
    phone = next(p for p in phones if p.uuid == order.phone)

After (O(1) per lookup):
    phones_by_uuid = LookupBuilder.build_unique(phones, "uuid")
    phone = phones_by_uuid[order.phone]

Natural-key joins between sample tables go through ``get_single`` so a miss
is a SampleLookupError instead of a silently skipped record:

    kinds_by_name = LookupBuilder.build(component_kinds, "name")
    kind = kinds_by_name.get_single("Battery")
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Generic, Hashable, Iterable, TypeVar

from .errors import SampleLookupError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LookupIndex(Generic[K, V]):
    """
    Lookup index mapping a key to every record that carries it.

    Attributes:
        _index: Internal dict mapping keys to lists of records
        _key_name: Name of the key attribute(s), used in error messages
    """

    __slots__ = ("_index", "_key_name")

    def __init__(
        self,
        index: dict[K, list[V]],
        key_name: str | tuple[str, ...] = "key",
    ) -> None:
        self._index: dict[K, list[V]] = index
        self._key_name = key_name

    def get(self, key: K, default: list[V] | None = None) -> list[V]:
        """Return all records for a key (empty list if missing)."""
        if default is None:
            default = []
        return self._index.get(key, default)

    def get_single(self, key: K) -> V:
        """
        Get exactly one record for a key.

        Raises:
            SampleLookupError: If the key is missing or ambiguous
        """
        values = self._index.get(key)
        if not values:
            raise SampleLookupError(f"No record found for {self._key_name}={key!r}")
        if len(values) > 1:
            raise SampleLookupError(
                f"Expected a single record for {self._key_name}={key!r}, "
                f"found {len(values)}"
            )
        return values[0]

    def __contains__(self, key: K) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        total = sum(len(v) for v in self._index.values())
        return f"LookupIndex(key={self._key_name}, unique_keys={len(self)}, total_values={total})"


class LookupBuilder:
    """Factory for LookupIndex instances over collections of records."""

    @staticmethod
    def build(records: Iterable[Any], key_attr: str) -> LookupIndex[Any, Any]:
        """
        Index records by a single attribute, preserving input order per key.

        Example:
            warehouse_by_supplier = LookupBuilder.build(warehouse, "supplier")
            items = warehouse_by_supplier.get(supplier.uuid)
        """
        index: dict[Any, list[Any]] = defaultdict(list)
        for record in records:
            key = getattr(record, key_attr)
            if key is not None:
                index[key].append(record)
        return LookupIndex(dict(index), key_attr)

    @staticmethod
    def build_composite(
        records: Iterable[Any],
        key_attrs: list[str] | tuple[str, ...],
    ) -> LookupIndex[tuple, Any]:
        """
        Index records by a tuple of attributes.

        Example:
            components = LookupBuilder.build_composite(components, ("kind", "phone_model"))
            component = components.get_single((kind.uuid, model.uuid))
        """
        index: dict[tuple, list[Any]] = defaultdict(list)
        key_attrs_tuple = tuple(key_attrs)
        for record in records:
            key = tuple(getattr(record, a) for a in key_attrs_tuple)
            if None not in key:
                index[key].append(record)
        return LookupIndex(dict(index), key_attrs_tuple)

    @staticmethod
    def build_unique(records: Iterable[Any], key_attr: str) -> dict[Any, Any]:
        """
        Build a flat dict for a 1:1 key (usually ``uuid``).

        Raises:
            ValueError: If duplicate keys are found
        """
        index: dict[Any, Any] = {}
        for record in records:
            key = getattr(record, key_attr)
            if key in index:
                raise ValueError(f"Duplicate key found: {key_attr}={key!r}")
            index[key] = record
        return index
