"""Factory pairing a store client with per-entry repository settings.

The same factory serves every DynamoDB entry of a composite configuration.
Two construction modes exist:

* bootstrap: the client is held directly (``DynamoEnvironmentRepositoryFactory(client)``);
* main: the client is looked up in the phase's registry each time
  :meth:`DynamoEnvironmentRepositoryFactory.build` runs
  (``DynamoEnvironmentRepositoryFactory.from_registry(registry, name)``).
"""

from __future__ import annotations

from ...application.ports import StoreClient
from ...application.registry import ComponentRegistry
from ...domain.settings import RepositoryConfig
from .repository import DynamoEnvironmentRepository


class DynamoEnvironmentRepositoryFactory:
    """Build :class:`DynamoEnvironmentRepository` instances."""

    def __init__(self, client: StoreClient | None = None) -> None:
        self._client = client
        self._registry: ComponentRegistry | None = None
        self._client_name: str | None = None

    @classmethod
    def from_registry(cls, registry: ComponentRegistry, client_name: str) -> DynamoEnvironmentRepositoryFactory:
        factory = cls()
        factory._registry = registry
        factory._client_name = client_name
        return factory

    def resolve_client(self) -> StoreClient | None:
        """Return the held client or resolve it from the registry.

        Raises
        ------
        MisconfigurationError
            When the registry does not hold the named client.
        """

        if self._registry is not None and self._client_name is not None:
            return self._registry.get(self._client_name)
        return self._client

    def build(self, config: RepositoryConfig) -> DynamoEnvironmentRepository:
        return DynamoEnvironmentRepository(config, self.resolve_client())
