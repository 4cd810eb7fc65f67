"""DynamoDB client providers.

Purpose
-------
Build the long-lived store client used by repositories, choosing between
static credentials and the boto3 default credential chain, and wrap the
low-level boto3 client so lookups return result values instead of raising.

Contents
--------
* :data:`DEFAULT_BOOTSTRAP_REGION` – region used by the bootstrap phase when
  the settings do not name one.
* :func:`build_client` – shared construction routine.
* :class:`BootstrapClientProvider` / :class:`MainClientProvider` – the two
  phase-specific providers.
* :class:`DynamoStoreClient` – :class:`~lib_dynamodb_config.application.ports.StoreClient`
  implementation over ``boto3.client("dynamodb")``.

System Role
-----------
The bootstrap phase must tolerate partially loaded settings and therefore
falls back to a fixed region. The main phase fails fast instead.
"""

from __future__ import annotations

from typing import Any, Final

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ...domain.errors import BackendError, MisconfigurationError
from ...domain.lookup import Failed, Found, LookupOutcome, Missing
from ...domain.settings import RepositoryConfig
from ...domain.values import parse_record
from ...observability import log_debug

DEFAULT_BOOTSTRAP_REGION: Final[str] = "us-east-1"
SERVICE_NAME: Final[str] = "dynamodb"


class DynamoStoreClient:
    """Point-lookup client over a boto3 DynamoDB client.

    boto3 low-level clients are thread-safe, so one instance serves every
    concurrent ``find_one`` of a phase.
    """

    def __init__(self, client: Any, *, region: str | None = None) -> None:
        self._client = client
        self.region = region

    @property
    def raw(self) -> Any:
        """The wrapped boto3 client."""

        return self._client

    def get_item(self, table: str | None, key_name: str, key_value: str) -> LookupOutcome:
        """Fetch ``key_name == key_value`` from *table*.

        ``ClientError`` (missing table, throttling, access denied) and
        ``BotoCoreError`` (connection failures, parameter validation) are
        returned as :class:`Failed`.
        """

        try:
            response = self._client.get_item(
                TableName=table,
                Key={key_name: {"S": key_value}},
            )
        except ClientError as exc:
            error = exc.response.get("Error", {})
            return Failed(
                BackendError(
                    str(error.get("Message") or exc),
                    code=error.get("Code") or type(exc).__name__,
                    key=key_value,
                )
            )
        except BotoCoreError as exc:
            return Failed(BackendError(str(exc), code=type(exc).__name__, key=key_value))

        item = response.get("Item")
        if not item:
            return Missing(key_value)
        return Found(parse_record(item))


def build_client(config: RepositoryConfig, default_region: str | None = None) -> DynamoStoreClient:
    """Return a :class:`DynamoStoreClient` for *config*.

    Parameters
    ----------
    config:
        Repository settings; ``region`` wins over *default_region* when it is
        not blank.
    default_region:
        Fallback region. ``None`` means no fallback.

    Raises
    ------
    MisconfigurationError
        When *config* is ``None`` or no region can be resolved.
    """

    if config is None:
        raise MisconfigurationError("Repository settings are required to build a DynamoDB client")
    region = _resolve_region(config.region, default_region)
    kwargs: dict[str, Any] = {
        "region_name": region,
        "config": BotoConfig(
            connect_timeout=config.connection_timeout_ms / 1000,
            read_timeout=config.request_timeout_ms / 1000,
        ),
    }
    if config.has_credentials():
        kwargs["aws_access_key_id"] = config.access_key
        kwargs["aws_secret_access_key"] = config.secret_key
    client = boto3.client(SERVICE_NAME, **kwargs)
    log_debug(
        "client_built",
        region=region,
        static_credentials=config.has_credentials(),
        connect_timeout_ms=config.connection_timeout_ms,
        request_timeout_ms=config.request_timeout_ms,
    )
    return DynamoStoreClient(client, region=region)


class BootstrapClientProvider:
    """Client provider for the bootstrap phase; falls back to a fixed region."""

    def __init__(self, default_region: str = DEFAULT_BOOTSTRAP_REGION) -> None:
        self.default_region = default_region

    def build_client(self, config: RepositoryConfig) -> DynamoStoreClient:
        return build_client(config, self.default_region)


class MainClientProvider:
    """Client provider for the main phase; requires an explicit region."""

    def build_client(self, config: RepositoryConfig) -> DynamoStoreClient:
        return build_client(config, None)


def _resolve_region(region: str | None, default_region: str | None) -> str:
    if region is not None and region.strip():
        return region.strip()
    if default_region:
        return default_region
    raise MisconfigurationError("DynamoDB region is not configured")
