"""Immutable settings consumed by the DynamoDB environment repository.

Purpose
-------
Carry backend coordinates (region, table, credentials, timeouts) and schema
parameters (partition key, config attribute, delimiter, order) as frozen value
objects so a lookup can never observe a half-updated configuration.

Contents
--------
* :data:`LOWEST_PRECEDENCE` – default order, placing repositories last when
  the hosting server merges them.
* :class:`RepositoryConfig` – per-repository settings with defaults.
* :class:`ServerSettings` – active profiles, bootstrap flag, top-level config,
  and composite entries.

System Role
-----------
Built by :func:`lib_dynamodb_config.core.load_settings` (or directly by a host)
and handed to client providers, repositories, and factories.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Final, Mapping, Sequence

from .errors import SettingsError

LOWEST_PRECEDENCE: Final[int] = 2**31 - 1

ACTIVATION_PROFILE: Final[str] = "dynamodb"
"""Profile name that switches the DynamoDB backend on."""

# Textual keys understood by :meth:`RepositoryConfig.from_mapping`, normalised to
# snake_case. Aliases follow the property names of the server configuration.
_KEY_ALIASES: Final[dict[str, str]] = {
    "partition_key": "partition_key",
    "partition_key_name": "partition_key",
    "config_attribute": "config_attribute",
    "config_attribute_name": "config_attribute",
    "key_delimiter": "delimiter",
    "connection_timeout": "connection_timeout_ms",
    "connection_timeout_ms": "connection_timeout_ms",
    "timeout": "request_timeout_ms",
    "timeout_ms": "request_timeout_ms",
    "request_timeout_ms": "request_timeout_ms",
}
_INT_FIELDS: Final[frozenset[str]] = frozenset({"order", "connection_timeout_ms", "request_timeout_ms"})


@dataclass(frozen=True, slots=True)
class RepositoryConfig:
    """Settings for one DynamoDB-backed environment repository.

    Examples
    --------
    >>> config = RepositoryConfig(region="us-east-1", table="config_table")
    >>> config.lookup_key("myapp", "prod")
    'myapp-prod'
    >>> config.has_credentials()
    False
    >>> RepositoryConfig(access_key="AKIA", secret_key="   ").has_credentials()
    False
    """

    region: str | None = None
    table: str | None = None
    access_key: str | None = None
    secret_key: str | None = field(default=None, repr=False)
    partition_key: str = "config_id"
    config_attribute: str = "properties"
    delimiter: str = "-"
    order: int = LOWEST_PRECEDENCE
    connection_timeout_ms: int = 10_000
    request_timeout_ms: int = 50_000

    def has_credentials(self) -> bool:
        """Return ``True`` when both access and secret keys are present and non-blank."""

        return _present(self.access_key) and _present(self.secret_key)

    def lookup_key(self, application: str, profile: str) -> str:
        """Join *application* and *profile* with the configured delimiter."""

        return f"{application}{self.delimiter}{profile}"

    def redacted(self) -> dict[str, Any]:
        """Return the settings as a plain dict with the secret key masked.

        Examples
        --------
        >>> RepositoryConfig(secret_key="s3cr3t").redacted()["secret_key"]
        '***'
        """

        payload = {item.name: getattr(self, item.name) for item in fields(self)}
        if payload["secret_key"] is not None:
            payload["secret_key"] = "***"
        return payload

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RepositoryConfig:
        """Bind a textual mapping (kebab-case or snake_case keys) to a config.

        Unknown keys are ignored so composite entries may carry a ``type``
        discriminator and options meant for other backends.

        Examples
        --------
        >>> cfg = RepositoryConfig.from_mapping({"region": "eu-west-1", "partition-key": "app_config", "order": "3"})
        >>> (cfg.region, cfg.partition_key, cfg.order)
        ('eu-west-1', 'app_config', 3)
        """

        known = {item.name for item in fields(cls)}
        values: dict[str, Any] = {}
        for raw_key, raw_value in data.items():
            key = str(raw_key).strip().replace("-", "_").lower()
            key = _KEY_ALIASES.get(key, key)
            if key not in known or raw_value is None:
                continue
            values[key] = _coerce_int(key, raw_value) if key in _INT_FIELDS else str(raw_value)
        return cls(**values)


@dataclass(frozen=True, slots=True)
class ServerSettings:
    """Everything the hosting server hands to this backend.

    Attributes
    ----------
    profiles:
        Active profile names of the hosting server.
    bootstrap:
        Whether the bootstrap phase builds its own client and factory.
    dynamodb:
        Top-level repository settings.
    composite:
        Settings for each composite entry whose ``type`` is ``dynamodb``.
    """

    profiles: tuple[str, ...] = ()
    bootstrap: bool = False
    dynamodb: RepositoryConfig = field(default_factory=RepositoryConfig)
    composite: tuple[RepositoryConfig, ...] = ()

    def is_active(self) -> bool:
        """Return ``True`` when the activation profile is among the active profiles."""

        return ACTIVATION_PROFILE in self.profiles

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ServerSettings:
        """Bind the merged settings tree produced by :func:`lib_dynamodb_config.core.load_settings`.

        Examples
        --------
        >>> settings = ServerSettings.from_mapping({
        ...     "profiles": {"active": "dynamodb,native"},
        ...     "server": {"dynamodb": {"region": "us-east-1", "table": "t"}},
        ... })
        >>> settings.is_active(), settings.dynamodb.table
        (True, 't')
        """

        profiles_section = _section(data, "profiles")
        server = _section(data, "server")
        entries = server.get("composite") or ()
        if isinstance(entries, Mapping):
            # Environment variables produce ``{"0": {...}, "1": {...}}``.
            entries = [entries[index] for index in sorted(entries, key=_index_key)]
        if not isinstance(entries, Sequence) or isinstance(entries, str):
            raise SettingsError("server.composite must be a list of mappings")
        composite = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise SettingsError(f"Composite entry is not a mapping: {entry!r}")
            if str(entry.get("type", "")).strip().lower() == ACTIVATION_PROFILE:
                composite.append(RepositoryConfig.from_mapping(entry))
        return cls(
            profiles=_profiles(profiles_section.get("active")),
            bootstrap=_coerce_bool(server.get("bootstrap", False)),
            dynamodb=RepositoryConfig.from_mapping(_section(server, "dynamodb")),
            composite=tuple(composite),
        )


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise SettingsError(f"Settings section '{name}' must be a mapping")
    return section


def _profiles(value: Any) -> tuple[str, ...]:
    """Normalise comma-separated strings or sequences into profile names."""

    if value is None:
        return ()
    items = value.split(",") if isinstance(value, str) else [str(item) for item in value]
    return tuple(item.strip() for item in items if item.strip())


def _coerce_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise SettingsError(f"Setting '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"Setting '{key}' must be an integer, got {value!r}") from exc


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in {"true", "1", "yes", "on"}:
        return True
    if lowered in {"false", "0", "no", "off", ""}:
        return False
    raise SettingsError(f"Setting 'bootstrap' must be a boolean, got {value!r}")


def _index_key(index: Any) -> tuple[int, str]:
    text = str(index)
    return (int(text), text) if text.isdigit() else (LOWEST_PRECEDENCE, text)
