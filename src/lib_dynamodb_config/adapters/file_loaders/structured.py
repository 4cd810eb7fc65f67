"""Structured settings file loaders.

Purpose
-------
Read the server settings file (TOML, JSON, or YAML) into a mapping that the
composition root merges with environment variables.

Contents
--------
* :class:`BaseFileLoader` – shared reading and mapping validation.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`.
* :func:`loader_for` – picks a loader from the file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format_name = "unknown"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Settings file not found: {path}")
        return file_path.read_bytes()

    def _parse(self, payload: bytes) -> object:
        raise NotImplementedError

    def load(self, path: str) -> Mapping[str, object]:
        """Parse *path* and return its top-level mapping.

        Raises
        ------
        NotFound
            The file does not exist.
        InvalidFormat
            The file cannot be parsed or does not contain a mapping.
        """

        payload = self._read(path)
        try:
            data = self._parse(payload)
        except (ValueError, yaml.YAMLError) as exc:
            # tomllib.TOMLDecodeError, json.JSONDecodeError and UnicodeDecodeError are ValueErrors.
            log_error("settings_file_invalid", path=path, format=self.format_name, error=str(exc))
            raise InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        log_debug("settings_file_loaded", path=path, format=self.format_name, size=len(payload))
        return data


class TOMLFileLoader(BaseFileLoader):
    format_name = "toml"

    def _parse(self, payload: bytes) -> object:
        return tomllib.loads(payload.decode("utf-8"))


class JSONFileLoader(BaseFileLoader):
    format_name = "json"

    def _parse(self, payload: bytes) -> object:
        return json.loads(payload)


class YAMLFileLoader(BaseFileLoader):
    format_name = "yaml"

    def _parse(self, payload: bytes) -> object:
        return yaml.safe_load(payload)


_LOADERS: dict[str, BaseFileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str) -> BaseFileLoader:
    """Return the loader registered for the suffix of *path*.

    Examples
    --------
    >>> type(loader_for("server.YML")).__name__
    'YAMLFileLoader'
    >>> loader_for("server.ini")
    Traceback (most recent call last):
    ...
    lib_dynamodb_config.domain.errors.InvalidFormat: Unsupported settings file type: server.ini
    """

    try:
        return _LOADERS[Path(path).suffix.lower()]
    except KeyError as exc:
        raise InvalidFormat(f"Unsupported settings file type: {path}") from exc
