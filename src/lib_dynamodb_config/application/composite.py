"""Composite repository ordering several backends by precedence.

Purpose
-------
Consult several :class:`~lib_dynamodb_config.application.ports.EnvironmentRepository`
instances the way the hosting server's composite backend does: ordered by
``order`` (lower first, stable for ties), with every property source appended
to a single environment.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.environment import Environment
from ..domain.settings import LOWEST_PRECEDENCE
from ..observability import log_debug
from .ports import EnvironmentRepository


class CompositeEnvironmentRepository:
    """Aggregate repositories; the highest-precedence sources come first."""

    def __init__(self, repositories: Iterable[EnvironmentRepository], *, order: int = LOWEST_PRECEDENCE) -> None:
        self._repositories = tuple(sorted(repositories, key=lambda repository: repository.order))
        self._order = order

    @property
    def order(self) -> int:
        return self._order

    @property
    def repositories(self) -> tuple[EnvironmentRepository, ...]:
        return self._repositories

    def find_one(self, application: str, profile: str, label: str | None = None) -> Environment:
        environment = Environment.create(application, profile, label)
        for repository in self._repositories:
            for source in repository.find_one(application, profile, label).property_sources:
                environment = environment.with_property_source(source)
        log_debug(
            "composite_resolved",
            repositories=len(self._repositories),
            sources=len(environment.property_sources),
        )
        return environment
