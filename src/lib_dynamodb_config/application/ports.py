"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root and the hosting server
rely on, so repositories can be composed and tested without boto3.

Contents
--------
* :class:`StoreClient` – performs one point lookup and returns a result value.
* :class:`ClientProvider` – builds a :class:`StoreClient` for a phase.
* :class:`EnvironmentRepository` – resolves ``(application, profile, label)``.
* :class:`RepositoryFactory` – pairs a client with incoming settings.

System Role
-----------
These protocols keep the dependency rule intact: the application layer talks
to abstractions while :mod:`lib_dynamodb_config.adapters.dynamodb` provides the
concrete implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.environment import Environment
from ..domain.lookup import LookupOutcome
from ..domain.settings import RepositoryConfig


@runtime_checkable
class StoreClient(Protocol):
    """Fetch a single record by partition key.

    Implementations must be safe for concurrent use and must report backend
    failures as :class:`~lib_dynamodb_config.domain.lookup.Failed` instead of
    raising.
    """

    def get_item(self, table: str | None, key_name: str, key_value: str) -> LookupOutcome:
        """Return the outcome of looking up ``key_name == key_value`` in *table*."""


@runtime_checkable
class ClientProvider(Protocol):
    """Build a store client bound to a region and optional static credentials."""

    def build_client(self, config: RepositoryConfig) -> StoreClient:
        """Return a ready-to-use client for *config*."""


@runtime_checkable
class EnvironmentRepository(Protocol):
    """Resolve configuration for an application/profile/label triple."""

    @property
    def order(self) -> int:
        """Precedence value; lower values are consulted first."""

    def find_one(self, application: str, profile: str, label: str | None = None) -> Environment:
        """Return an environment; never raises for backend conditions."""


@runtime_checkable
class RepositoryFactory(Protocol):
    """Produce repositories from per-entry settings."""

    def build(self, config: RepositoryConfig) -> EnvironmentRepository:
        """Return a repository bound to *config*."""
