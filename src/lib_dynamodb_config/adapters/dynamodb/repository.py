"""DynamoDB-backed environment repository.

Purpose
-------
Translate an ``(application, profile, label)`` request into at most one
property source by fetching a single record from the configuration table.

Lookup protocol
---------------
1. ``key = application + delimiter + profile``; the label is never part of
   the key.
2. One point lookup against ``partition_key == key``.
3. ``Failed``, or any exception raised by the client → error log, empty
   environment.
4. ``Missing`` → info log, empty environment.
5. ``Found`` → read the configuration attribute. If it is absent, not a map,
   or empty, log a warning and return an empty environment. Otherwise
   flatten it into one property source.

Every path returns an :class:`~lib_dynamodb_config.domain.environment.Environment`
for the request; backend problems never escape as exceptions.
"""

from __future__ import annotations

from ...application.flatten import flatten_record
from ...application.ports import StoreClient
from ...domain.environment import Environment, PropertySource, property_source_name
from ...domain.errors import BackendError, MisconfigurationError
from ...domain.lookup import Failed, LookupOutcome, Missing
from ...domain.settings import RepositoryConfig
from ...domain.values import AttributeKind, StoreRecord
from ...observability import log_debug, log_error, log_info, log_warning, make_event


class DynamoEnvironmentRepository:
    """Environment repository reading one table through a shared client.

    Examples
    --------
    >>> from lib_dynamodb_config.domain.lookup import Missing
    >>> class _Empty:
    ...     def get_item(self, table, key_name, key_value):
    ...         return Missing(key_value)
    >>> repository = DynamoEnvironmentRepository(RepositoryConfig(region="us-east-1", table="t", order=5), _Empty())
    >>> env = repository.find_one("ghost-app", "prod", "master")
    >>> env.name, env.profiles, env.property_sources, repository.order
    ('ghost-app', ('prod',), (), 5)
    """

    def __init__(self, config: RepositoryConfig, client: StoreClient | None) -> None:
        if config is None:
            raise MisconfigurationError("DynamoEnvironmentRepository requires repository settings")
        self._config = config
        self._client = client
        log_debug("repository_created", table=config.table, region=config.region, order=config.order)

    @property
    def config(self) -> RepositoryConfig:
        return self._config

    @property
    def client(self) -> StoreClient | None:
        return self._client

    @property
    def order(self) -> int:
        return self._config.order

    def get_order(self) -> int:
        return self._config.order

    def find_one(self, application: str, profile: str, label: str | None = None) -> Environment:
        environment = Environment.create(application, profile, label)
        key = self._config.lookup_key(application, profile)
        log_debug("lookup_started", **make_event(key, self._config.table))

        outcome = self._fetch(key)
        if isinstance(outcome, Failed):
            log_error(
                "lookup_failed",
                **make_event(key, self._config.table, {"code": outcome.error.code, "error": outcome.error.message}),
            )
            return environment
        if isinstance(outcome, Missing):
            log_info("record_missing", **make_event(key, self._config.table))
            return environment

        source = self._property_source(application, profile, label, key, outcome.record)
        if source is None:
            return environment
        log_debug("property_source_built", **make_event(key, self._config.table, {"keys": len(source.source)}))
        return environment.with_property_source(source)

    def _fetch(self, key: str) -> LookupOutcome:
        if self._client is None:
            return Failed(BackendError("No DynamoDB client bound to repository", code="NoClient", key=key))
        try:
            return self._client.get_item(self._config.table, self._config.partition_key, key)
        except Exception as exc:  # noqa: BLE001 - any store client failure serves an empty environment
            return Failed(BackendError(str(exc), code=type(exc).__name__, key=key))

    def _property_source(
        self, application: str, profile: str, label: str | None, key: str, record: StoreRecord
    ) -> PropertySource | None:
        attribute = record.get(self._config.config_attribute)
        if attribute is None or attribute.kind is not AttributeKind.MAP:
            log_warning(
                "config_attribute_missing",
                **make_event(key, self._config.table, {"attribute": self._config.config_attribute}),
            )
            return None
        if not attribute.value:
            log_warning(
                "config_attribute_empty",
                **make_event(key, self._config.table, {"attribute": self._config.config_attribute}),
            )
            return None
        name = property_source_name(self._config.region, self._config.table, application, profile, label)
        return PropertySource(name, flatten_record(attribute.value))
