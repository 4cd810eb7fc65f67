"""Value flattening engine.

Purpose
-------
Convert the store's nested typed-value tree into the flat, dotted-key property
map the hosting server expects. Free of I/O so it can be reused by any store
adapter.

Contents
    - ``convert_typed_value``: tag dispatch from :class:`TypedValue` to plain
      Python scalars and containers.
    - ``to_plain_mapping``: converts every attribute of a record.
    - ``flatten``: joins nested mapping keys with dots.
    - ``flatten_record``: the two steps combined.

Notes
-----
Lists are terminal. They are converted element-wise but stored under their
parent key as-is, never expanded into indexed paths. Numbers keep the exact
text sent by the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from ..domain.values import AttributeKind, StoreRecord, TypedValue


def convert_typed_value(value: TypedValue) -> Any:
    """Return the plain Python form of *value*.

    Examples
    --------
    >>> convert_typed_value(TypedValue.number("123456789012345.000001"))
    '123456789012345.000001'
    >>> convert_typed_value(TypedValue.list([TypedValue.boolean(True), TypedValue.string("x")]))
    [True, 'x']
    >>> convert_typed_value(TypedValue.unknown()) is None
    True
    """

    return _CONVERTERS[value.kind](value.value)


def to_plain_mapping(record: StoreRecord) -> dict[str, Any]:
    """Convert every attribute of *record* with :func:`convert_typed_value`."""

    return {key: convert_typed_value(value) for key, value in record.items()}


def flatten(node: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    Keys that already contain dots are kept verbatim; only nested mappings
    recurse.

    Examples
    --------
    >>> flatten({"database": {"host": "db1", "port": "5432"}, "app": {"version": "1.0.0"}})
    {'database.host': 'db1', 'database.port': '5432', 'app.version': '1.0.0'}
    >>> flatten({"custom.setting": "custom-value"})
    {'custom.setting': 'custom-value'}
    >>> flatten({"hosts": ["a", "b"]}, prefix="cluster")
    {'cluster.hosts': ['a', 'b']}
    """

    flat: dict[str, Any] = {}
    _flatten_into(flat, node, prefix)
    return flat


def flatten_record(record: StoreRecord) -> dict[str, Any]:
    """Convert and flatten a record in one step."""

    return flatten(to_plain_mapping(record))


def _flatten_into(target: dict[str, Any], node: Mapping[str, Any], prefix: str) -> None:
    for key, value in node.items():
        dotted = _dotted_key(prefix, key)
        if isinstance(value, Mapping):
            _flatten_into(target, value, dotted)
        else:
            target[dotted] = value


def _dotted_key(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _convert_map(entries: Mapping[str, TypedValue]) -> dict[str, Any]:
    return {key: convert_typed_value(item) for key, item in entries.items()}


def _convert_list(items: Any) -> list[Any]:
    return [convert_typed_value(item) for item in items]


# One converter per tag. Extending AttributeKind requires a new entry here.
_CONVERTERS: dict[AttributeKind, Callable[[Any], Any]] = {
    AttributeKind.STRING: str,
    AttributeKind.NUMBER: str,
    AttributeKind.BOOL: bool,
    AttributeKind.MAP: _convert_map,
    AttributeKind.LIST: _convert_list,
    AttributeKind.UNKNOWN: lambda _value: None,
}
