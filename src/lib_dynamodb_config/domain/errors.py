"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, and the
hosting configuration server. The hierarchy lives in the domain layer so outer
layers can depend on it without pulling in boto3.

Contents
--------
* :class:`DynamoConfigError` – umbrella base class.
* :class:`SettingsError` – settings could not be bound to value objects.
* :class:`InvalidFormat` – a settings file could not be parsed.
* :class:`NotFound` – a settings file does not exist.
* :class:`MisconfigurationError` – wiring mistakes that must halt startup.
* :class:`BackendError` – store failures carried inside lookup results.

System Role
-----------
Only :class:`MisconfigurationError` and the settings errors are ever raised to
the host. :class:`BackendError` instances travel inside
:class:`lib_dynamodb_config.domain.lookup.Failed` and end up in logs.
"""

from __future__ import annotations


class DynamoConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_dynamodb_config``."""


class SettingsError(DynamoConfigError):
    """Raised when textual settings cannot be bound to a value object.

    Typical Sources
    ---------------
    Non-integer ``order`` or timeout values, composite entries that are not
    mappings.
    """


class InvalidFormat(SettingsError):
    """Raised when a settings file cannot be parsed into structured data."""


class NotFound(DynamoConfigError):
    """Represents a settings file that does not exist."""


class MisconfigurationError(DynamoConfigError):
    """Signals a wiring error detected while constructing components.

    Why
    ----
    A missing configuration object or an unresolvable region is a programming
    or deployment mistake, not a runtime backend condition. Startup should
    stop instead of serving empty configuration forever.
    """


class BackendError(DynamoConfigError):
    """Describe a failed store round trip.

    Attributes
    ----------
    code:
        Store error code (``ResourceNotFoundException``, ``ThrottlingException``)
        or the exception class name for transport failures.
    key:
        Lookup key that was being fetched, kept for diagnostics.
    """

    def __init__(self, message: str, *, code: str | None = None, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.key = key
