"""Environment value objects returned to the hosting configuration server.

Purpose
-------
Mirror the host's environment data model: a named, flat property source and
the per-request environment container that holds zero or more of them.

Contents
--------
* :data:`SOURCE_SCHEME` – scheme prefix of property-source names.
* :func:`property_source_name` – builds the identifier string.
* :class:`PropertySource` – immutable flat mapping with a name.
* :class:`Environment` – immutable request result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Mapping

SOURCE_SCHEME: Final[str] = "DynamoDB"


def property_source_name(
    region: str | None, table: str | None, application: str, profile: str, label: str | None
) -> str:
    """Return ``DynamoDB://<region>:<table>/<application>/<profile>/<label>``.

    Examples
    --------
    >>> property_source_name("us-east-1", "config_table", "myapp", "dev", "master")
    'DynamoDB://us-east-1:config_table/myapp/dev/master'
    >>> property_source_name("us-east-1", "config_table", "myapp", "dev", None)
    'DynamoDB://us-east-1:config_table/myapp/dev/'
    """

    return f"{SOURCE_SCHEME}://{region}:{table}/{application}/{profile}/{label if label is not None else ''}"


@dataclass(frozen=True, slots=True)
class PropertySource:
    """A named flat collection of dotted keys and scalar values."""

    name: str
    source: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", MappingProxyType(dict(self.source)))

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "source": dict(self.source)}


@dataclass(frozen=True, slots=True)
class Environment:
    """Result of one ``find_one`` request.

    ``profiles`` is derived from the comma-separated profile string the host
    passes in, the same way the host splits it.

    Examples
    --------
    >>> env = Environment.create("myapp", "dev,cloud", "master")
    >>> env.profiles
    ('dev', 'cloud')
    >>> env.with_property_source(PropertySource("p", {"a": 1})).property_sources[0].source["a"]
    1
    >>> env.property_sources
    ()
    """

    name: str
    profiles: tuple[str, ...]
    label: str | None = None
    property_sources: tuple[PropertySource, ...] = ()

    @classmethod
    def create(cls, application: str, profile: str, label: str | None = None) -> Environment:
        profiles = tuple(part.strip() for part in profile.split(",") if part.strip())
        return cls(application, profiles, label)

    def with_property_source(self, source: PropertySource) -> Environment:
        """Return a copy with *source* appended to the property sources."""

        return Environment(self.name, self.profiles, self.label, (*self.property_sources, source))

    def as_dict(self) -> dict[str, Any]:
        """Render the environment with the host's JSON field names."""

        return {
            "name": self.name,
            "profiles": list(self.profiles),
            "label": self.label,
            "propertySources": [source.as_dict() for source in self.property_sources],
        }

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)
