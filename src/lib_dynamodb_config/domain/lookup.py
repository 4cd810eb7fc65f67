"""Explicit result type for a single point lookup.

A store client never raises for backend conditions. It returns one of
:class:`Found`, :class:`Missing`, or :class:`Failed` and the repository maps
each outcome to either the record path or the empty path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import BackendError
from .values import StoreRecord


@dataclass(frozen=True, slots=True)
class Found:
    record: StoreRecord


@dataclass(frozen=True, slots=True)
class Missing:
    key: str


@dataclass(frozen=True, slots=True)
class Failed:
    error: BackendError


LookupOutcome = Union[Found, Missing, Failed]
