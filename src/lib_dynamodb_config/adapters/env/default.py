"""Environment variable adapter for server settings.

Purpose
-------
Collect ``<PREFIX>_SECTION__KEY=value`` variables into the nested settings
tree consumed by :meth:`lib_dynamodb_config.domain.settings.ServerSettings.from_mapping`.

Key behaviours
--------------
* Only variables starting with the prefix are captured.
* ``__`` separates nesting levels
  (``LIB_DYNAMODB_CONFIG_SERVER__DYNAMODB__REGION`` → ``server.dynamodb.region``).
* Values stay strings. Credentials such as ``0123abc`` must survive intact, so
  type coercion is left to the settings binding.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from ...domain.errors import SettingsError
from ...observability import log_debug


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-dynamodb-config')
    'LIB_DYNAMODB_CONFIG'
    """

    return slug.replace("-", "_").upper()


DEFAULT_ENV_PREFIX: Final[str] = default_env_prefix("lib-dynamodb-config")


class DefaultEnvLoader:
    """Load settings variables from a process environment mapping."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str = DEFAULT_ENV_PREFIX) -> dict[str, object]:
        """Return a nested mapping built from variables carrying *prefix*.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={
        ...     'DEMO_SERVER__DYNAMODB__REGION': 'eu-west-1',
        ...     'DEMO_SERVER__DYNAMODB__SECRET_KEY': '0123',
        ...     'OTHER': 'ignored',
        ... })
        >>> loader.load('DEMO')
        {'server': {'dynamodb': {'region': 'eu-west-1', 'secret_key': '0123'}}}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in sorted(self._environ.items()):
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            assign_nested(collected, stripped, value)
        log_debug("env_variables_loaded", prefix=prefix, keys=sorted(collected.keys()))
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as the nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'PROFILES__ACTIVE', 'dynamodb')
    >>> data
    {'profiles': {'active': 'dynamodb'}}
    """

    parts = [part.lower() for part in key.split("__")]
    cursor = target
    for part in parts[:-1]:
        child = cursor.setdefault(part, {})
        if not isinstance(child, dict):
            raise SettingsError(f"Environment variable {key} nests below scalar setting '{part}'")
        cursor = child
    if isinstance(cursor.get(parts[-1]), dict):
        raise SettingsError(f"Environment variable {key} would replace settings section '{parts[-1]}'")
    cursor[parts[-1]] = value
