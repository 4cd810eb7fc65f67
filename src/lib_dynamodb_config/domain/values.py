"""Typed attribute values as stored by the backing table.

Purpose
-------
Model the store's tagged attribute union as a closed variant so the flattening
engine can dispatch on a tag instead of inspecting runtime types.

Contents
--------
* :class:`AttributeKind` – the closed tag set.
* :class:`TypedValue` – immutable ``(kind, value)`` pair with named
  constructors.
* :func:`parse_attribute` / :func:`parse_record` – translate the wire shape
  returned by the low-level DynamoDB API (``{"S": "x"}``, ``{"N": "1"}``...)
  into :class:`TypedValue` trees.

System Role
-----------
Used by the DynamoDB client adapter when a record comes back and by the
flattening engine in :mod:`lib_dynamodb_config.application.flatten`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class AttributeKind(Enum):
    """Closed set of attribute variants understood by the flattening engine."""

    STRING = "S"
    NUMBER = "N"
    BOOL = "BOOL"
    MAP = "M"
    LIST = "L"
    UNKNOWN = "?"


@dataclass(frozen=True, slots=True)
class TypedValue:
    """A single store attribute tagged with its variant.

    ``NUMBER`` values keep the exact text sent by the store. ``MAP`` values hold
    a read-only mapping of :class:`TypedValue`, ``LIST`` values a tuple.

    Examples
    --------
    >>> TypedValue.number("123456789012345").value
    '123456789012345'
    >>> TypedValue.map({"host": TypedValue.string("db1")}).value["host"].kind
    <AttributeKind.STRING: 'S'>
    """

    kind: AttributeKind
    value: Any = None

    @classmethod
    def string(cls, value: str) -> TypedValue:
        return cls(AttributeKind.STRING, value)

    @classmethod
    def number(cls, text: str) -> TypedValue:
        return cls(AttributeKind.NUMBER, text)

    @classmethod
    def boolean(cls, value: bool) -> TypedValue:
        return cls(AttributeKind.BOOL, value)

    @classmethod
    def map(cls, entries: Mapping[str, TypedValue]) -> TypedValue:
        return cls(AttributeKind.MAP, MappingProxyType(dict(entries)))

    @classmethod
    def list(cls, items: Any) -> TypedValue:
        return cls(AttributeKind.LIST, tuple(items))

    @classmethod
    def unknown(cls) -> TypedValue:
        return cls(AttributeKind.UNKNOWN)


StoreRecord = Mapping[str, TypedValue]
"""A record returned by a point lookup, keyed by attribute name."""


def parse_attribute(wire: Any) -> TypedValue:
    """Translate one wire-format attribute into a :class:`TypedValue`.

    Anything outside the supported variants (``NULL``, string/number sets,
    binaries, malformed payloads) yields :meth:`TypedValue.unknown`.

    Examples
    --------
    >>> parse_attribute({"N": "5432"})
    TypedValue(kind=<AttributeKind.NUMBER: 'N'>, value='5432')
    >>> parse_attribute({"NULL": True}).kind
    <AttributeKind.UNKNOWN: '?'>
    >>> parse_attribute({"L": [{"S": "a"}, {"BOOL": False}]}).value[1].value
    False
    """

    if not isinstance(wire, Mapping) or len(wire) != 1:
        return TypedValue.unknown()
    tag, payload = next(iter(wire.items()))
    if tag == "S" and isinstance(payload, str):
        return TypedValue.string(payload)
    if tag == "N" and isinstance(payload, str):
        return TypedValue.number(payload)
    if tag == "BOOL" and isinstance(payload, bool):
        return TypedValue.boolean(payload)
    if tag == "M" and isinstance(payload, Mapping):
        return TypedValue.map(parse_record(payload))
    if tag == "L" and isinstance(payload, (list, tuple)):
        return TypedValue.list(parse_attribute(item) for item in payload)
    return TypedValue.unknown()


def parse_record(item: Mapping[str, Any]) -> dict[str, TypedValue]:
    """Parse every attribute of a wire-format item."""

    return {str(name): parse_attribute(attribute) for name, attribute in item.items()}
