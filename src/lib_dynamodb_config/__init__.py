"""DynamoDB environment repository for centralized configuration servers.

The package resolves ``(application, profile)`` into one DynamoDB record,
flattens its nested configuration attribute into dotted keys, and hands the
result back as an :class:`Environment`. Hosts wire it through
:func:`register_main_phase` and :func:`register_bootstrap_phase`.
"""

from __future__ import annotations

from .adapters.dynamodb.client import (
    DEFAULT_BOOTSTRAP_REGION,
    BootstrapClientProvider,
    DynamoStoreClient,
    MainClientProvider,
    build_client,
)
from .adapters.dynamodb.factory import DynamoEnvironmentRepositoryFactory
from .adapters.dynamodb.repository import DynamoEnvironmentRepository
from .application.composite import CompositeEnvironmentRepository
from .application.flatten import convert_typed_value, flatten, flatten_record
from .application.registry import ComponentRegistry
from .core import find_environment, load_settings, register_bootstrap_phase, register_main_phase
from .domain.environment import Environment, PropertySource
from .domain.errors import (
    BackendError,
    DynamoConfigError,
    InvalidFormat,
    MisconfigurationError,
    NotFound,
    SettingsError,
)
from .domain.settings import LOWEST_PRECEDENCE, RepositoryConfig, ServerSettings
from .domain.values import AttributeKind, TypedValue
from .observability import bind_trace_id, get_logger

__all__ = [
    "AttributeKind",
    "BackendError",
    "BootstrapClientProvider",
    "ComponentRegistry",
    "CompositeEnvironmentRepository",
    "DEFAULT_BOOTSTRAP_REGION",
    "DynamoConfigError",
    "DynamoEnvironmentRepository",
    "DynamoEnvironmentRepositoryFactory",
    "DynamoStoreClient",
    "Environment",
    "InvalidFormat",
    "LOWEST_PRECEDENCE",
    "MainClientProvider",
    "MisconfigurationError",
    "NotFound",
    "PropertySource",
    "RepositoryConfig",
    "ServerSettings",
    "SettingsError",
    "TypedValue",
    "bind_trace_id",
    "build_client",
    "convert_typed_value",
    "find_environment",
    "flatten",
    "flatten_record",
    "get_logger",
    "load_settings",
    "register_bootstrap_phase",
    "register_main_phase",
]
