"""Shared helpers for repository and client tests.

Provides wire-format item builders, a stubbed boto3 DynamoDB client factory,
and in-memory store clients that implement the ``StoreClient`` port without
boto3.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

import boto3

from lib_dynamodb_config.domain.errors import BackendError
from lib_dynamodb_config.domain.lookup import Failed, Found, LookupOutcome, Missing
from lib_dynamodb_config.domain.values import parse_record

TABLE = "config_table"
REGION = "us-east-1"


def make_boto_client(region: str = REGION) -> Any:
    """Return a real boto3 DynamoDB client with dummy credentials for use with ``Stubber``."""

    return boto3.client(
        "dynamodb",
        region_name=region,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def wire(value: Any) -> dict[str, Any]:
    """Encode a plain Python value as a DynamoDB wire attribute.

    Strings become ``S``, booleans ``BOOL``, ints/floats ``N`` (as text),
    dicts ``M``, lists ``L``. A :class:`Number` keeps its exact text.
    """

    if isinstance(value, Number):
        return {"N": value.text}
    if isinstance(value, bool):
        return {"BOOL": value}
    if isinstance(value, (int, float)):
        return {"N": str(value)}
    if isinstance(value, str):
        return {"S": value}
    if isinstance(value, Mapping):
        return {"M": {key: wire(item) for key, item in value.items()}}
    if isinstance(value, list):
        return {"L": [wire(item) for item in value]}
    raise TypeError(f"Cannot encode {value!r}")


class Number:
    """Marker for numeric attributes given as text."""

    def __init__(self, text: str) -> None:
        self.text = text


def make_item(
    key_value: str,
    config: Mapping[str, Any] | None,
    *,
    key_name: str = "config_id",
    attribute: str = "properties",
) -> dict[str, Any]:
    """Return a wire-format item holding *config* under *attribute*."""

    item: dict[str, Any] = {key_name: {"S": key_value}}
    if config is not None:
        item[attribute] = wire(dict(config))
    return item


def expected_get_item(key_value: str, *, table: str = TABLE, key_name: str = "config_id") -> dict[str, Any]:
    return {"TableName": table, "Key": {key_name: {"S": key_value}}}


class InMemoryStoreClient:
    """``StoreClient`` fake backed by a dict of wire-format items per table."""

    def __init__(self, items: Mapping[str, Mapping[str, Any]] | None = None, *, table: str = TABLE) -> None:
        self.table = table
        self.items = {key: dict(value) for key, value in (items or {}).items()}
        self.calls: list[tuple[str | None, str, str]] = []
        self._lock = threading.Lock()

    def get_item(self, table: str | None, key_name: str, key_value: str) -> LookupOutcome:
        with self._lock:
            self.calls.append((table, key_name, key_value))
        if table != self.table:
            return Failed(BackendError("Requested resource not found", code="ResourceNotFoundException", key=key_value))
        item = self.items.get(key_value)
        if item is None or item.get(key_name) != {"S": key_value}:
            return Missing(key_value)
        return Found(parse_record(item))


class FailingStoreClient:
    """``StoreClient`` fake that always reports a backend failure."""

    def __init__(self, code: str = "ThrottlingException", message: str = "Rate exceeded") -> None:
        self.code = code
        self.message = message

    def get_item(self, table: str | None, key_name: str, key_value: str) -> LookupOutcome:
        return Failed(BackendError(self.message, code=self.code, key=key_value))
