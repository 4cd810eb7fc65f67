"""Fixtures shared by the end-to-end tests."""

from __future__ import annotations

import os
from typing import Any, Iterator

import pytest
from botocore.stub import Stubber

from lib_dynamodb_config.adapters.dynamodb import client as client_module
from tests.support import make_boto_client


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop settings variables from the real process environment."""

    for name in list(os.environ):
        if name.startswith("LIB_DYNAMODB_CONFIG_"):
            monkeypatch.delenv(name)


@pytest.fixture()
def stubbed_dynamodb(monkeypatch: pytest.MonkeyPatch) -> Iterator[tuple[Stubber, list[dict[str, Any]]]]:
    """Route every ``boto3.client`` call through one stubbed DynamoDB client.

    Yields the stubber and the list of keyword arguments each client was
    requested with.
    """

    boto_client = make_boto_client()
    requested: list[dict[str, Any]] = []

    def _client(service_name: str, **kwargs: Any) -> Any:
        requested.append({"service_name": service_name, **kwargs})
        return boto_client

    monkeypatch.setattr(client_module.boto3, "client", _client)
    with Stubber(boto_client) as stubber:
        yield stubber, requested
        stubber.assert_no_pending_responses()
