"""ResolverCollection — ordered fallback across several resolvers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from warrant.domain.authorization.resolver.base import PolicyResolver
from warrant.domain.shared.error import MissingPolicyError
from warrant.domain.shared.naming import type_name

logger = logging.getLogger(__name__)


class ResolverCollection(PolicyResolver):
    """Tries resolvers in order. First match wins.

    Fails only when every resolver fails; the individual failures are kept
    on ``MissingPolicyError.causes``.
    """

    def __init__(self, resolvers: Iterable[PolicyResolver] = ()) -> None:
        self._resolvers: list[PolicyResolver] = list(resolvers)

    def add(self, resolver: PolicyResolver) -> ResolverCollection:
        """Append a resolver (tried after the existing ones)."""
        self._resolvers.append(resolver)
        return self

    def __len__(self) -> int:
        return len(self._resolvers)

    def get_policy(self, resource: Any) -> Any:
        causes: list[MissingPolicyError] = []
        for resolver in self._resolvers:
            try:
                return resolver.get_policy(resource)
            except MissingPolicyError as e:
                logger.debug(
                    "Resolver %s has no policy for %s",
                    type(resolver).__name__,
                    e.resource_type,
                )
                causes.append(e)

        raise MissingPolicyError(type_name(type(resource)), causes=tuple(causes))
