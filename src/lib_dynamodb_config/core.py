"""Composition root for ``lib_dynamodb_config``.

Purpose
-------
Wire settings sources, client providers, factories, and repositories for the
two lifecycle phases of the hosting configuration server.

Contents
--------
* Component names used in the per-phase registries.
* :func:`load_settings` – merges a settings file with environment variables.
* :func:`register_main_phase` / :func:`register_bootstrap_phase` – the two
  registration points, gated identically by the ``dynamodb`` profile.
* :func:`build_repositories` / :func:`find_environment` – convenience helpers
  used by the CLI and by hosts without a composite backend of their own.

System Role
-----------
The bootstrap phase runs before the host resolves its composite backends and
must tolerate incomplete settings, so its client falls back to a default
region. The main phase fails fast on a missing region. Each phase owns its own
:class:`ComponentRegistry` and its own client.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .adapters.dynamodb.client import BootstrapClientProvider, MainClientProvider
from .adapters.dynamodb.factory import DynamoEnvironmentRepositoryFactory
from .adapters.dynamodb.repository import DynamoEnvironmentRepository
from .adapters.env.default import DEFAULT_ENV_PREFIX, DefaultEnvLoader
from .adapters.file_loaders.structured import loader_for
from .application.composite import CompositeEnvironmentRepository
from .application.ports import ClientProvider, EnvironmentRepository, RepositoryFactory
from .application.registry import ComponentRegistry
from .domain.environment import Environment
from .domain.settings import ACTIVATION_PROFILE, RepositoryConfig, ServerSettings
from .observability import log_debug, log_info

MAIN_CLIENT: Final[str] = "config_dynamodb_client"
BOOTSTRAP_CLIENT: Final[str] = "bootstrap_dynamodb_client"
REPOSITORY: Final[str] = "dynamodb_environment_repository"
FACTORY: Final[str] = "dynamodb_environment_repository_factory"
SETTINGS: Final[str] = "dynamodb_server_settings"


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    prefix: str = DEFAULT_ENV_PREFIX,
) -> ServerSettings:
    """Return :class:`ServerSettings` from an optional file plus environment variables.

    Environment variables take precedence over the file. Both are merged
    key by key, so a variable only overrides the single setting it names.

    Raises
    ------
    NotFound
        *path* was given but does not exist.
    InvalidFormat
        The file cannot be parsed.
    SettingsError
        Values cannot be bound (for example a non-integer ``order``).

    Examples
    --------
    >>> settings = load_settings(environ={
    ...     "LIB_DYNAMODB_CONFIG_PROFILES__ACTIVE": "dynamodb",
    ...     "LIB_DYNAMODB_CONFIG_SERVER__DYNAMODB__TABLE": "config_table",
    ... })
    >>> settings.is_active(), settings.dynamodb.table
    (True, 'config_table')
    """

    merged: dict[str, Any] = {}
    if path is not None:
        file_data = loader_for(str(path)).load(str(path))
        merged = _deep_merge(merged, file_data)
    env_data = DefaultEnvLoader(environ=environ).load(prefix)
    merged = _deep_merge(merged, env_data)
    settings = ServerSettings.from_mapping(merged)
    log_debug(
        "settings_loaded",
        path=str(path) if path is not None else None,
        profiles=list(settings.profiles),
        composite=len(settings.composite),
    )
    return settings


def register_main_phase(
    registry: ComponentRegistry,
    settings: ServerSettings,
    *,
    provider: ClientProvider | None = None,
) -> bool:
    """Register the main-phase client, repository, and factory.

    Returns ``False`` without touching *registry* unless the ``dynamodb``
    profile is active. The client is built from the top-level settings and a
    missing region raises :class:`MisconfigurationError`. The repository and
    factory are only registered when the host has not provided its own.
    """

    if not settings.is_active():
        log_debug("phase_skipped", phase="main", profile=ACTIVATION_PROFILE)
        return False
    provider = provider or MainClientProvider()
    registry.register(SETTINGS, settings.dynamodb)
    client = registry.register(MAIN_CLIENT, provider.build_client(settings.dynamodb))
    registry.register_if_missing(REPOSITORY, DynamoEnvironmentRepository(settings.dynamodb, client))
    registry.register_if_missing(FACTORY, DynamoEnvironmentRepositoryFactory.from_registry(registry, MAIN_CLIENT))
    log_info("phase_registered", phase="main", registry=registry.name, components=registry.names())
    return True


def register_bootstrap_phase(
    registry: ComponentRegistry,
    settings: ServerSettings,
    *,
    provider: ClientProvider | None = None,
) -> bool:
    """Register the bootstrap-phase client and a client-holding factory.

    Gated exactly like :func:`register_main_phase`. The client settings come
    from the top-level section, or from the first composite entry when the
    top-level section names no region.
    """

    if not settings.is_active():
        log_debug("phase_skipped", phase="bootstrap", profile=ACTIVATION_PROFILE)
        return False
    provider = provider or BootstrapClientProvider()
    client_settings = _bootstrap_client_settings(settings)
    registry.register(SETTINGS, client_settings)
    client = registry.register(BOOTSTRAP_CLIENT, provider.build_client(client_settings))
    registry.register_if_missing(FACTORY, DynamoEnvironmentRepositoryFactory(client))
    log_info("phase_registered", phase="bootstrap", registry=registry.name, components=registry.names())
    return True


def build_repositories(factory: RepositoryFactory, settings: ServerSettings) -> list[EnvironmentRepository]:
    """Build one repository per composite entry, or one for the top-level settings."""

    configs = settings.composite or (settings.dynamodb,)
    return [factory.build(config) for config in configs]


def find_environment(
    settings: ServerSettings,
    application: str,
    profile: str,
    label: str | None = None,
) -> Environment:
    """Resolve an environment the way the hosting server would.

    Uses the bootstrap phase when ``settings.bootstrap`` is set and the main
    phase otherwise. An inactive backend yields an empty environment.
    """

    registry = ComponentRegistry("bootstrap" if settings.bootstrap else "main")
    register = register_bootstrap_phase if settings.bootstrap else register_main_phase
    if not register(registry, settings):
        return Environment.create(application, profile, label)
    repositories = build_repositories(registry.get(FACTORY), settings)
    return CompositeEnvironmentRepository(repositories).find_one(application, profile, label)


def _bootstrap_client_settings(settings: ServerSettings) -> RepositoryConfig:
    top_level = settings.dynamodb
    if (top_level.region or "").strip() or not settings.composite:
        return top_level
    return settings.composite[0]


def _deep_merge(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Return *base* updated with *incoming*, recursing into shared mappings.

    Examples
    --------
    >>> _deep_merge({"server": {"bootstrap": False, "dynamodb": {"table": "a"}}}, {"server": {"dynamodb": {"region": "x"}}})
    {'server': {'bootstrap': False, 'dynamodb': {'table': 'a', 'region': 'x'}}}
    """

    merged = dict(base)
    for key, value in incoming.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "MAIN_CLIENT",
    "BOOTSTRAP_CLIENT",
    "REPOSITORY",
    "FACTORY",
    "SETTINGS",
    "load_settings",
    "register_main_phase",
    "register_bootstrap_phase",
    "build_repositories",
    "find_environment",
]
