"""DI provider for the authorization domain."""

import logging
from typing import Any

from dishka import Provider, from_context, provide

from warrant.config import Config
from warrant.domain.authorization.identity import IdentityDecorator
from warrant.domain.authorization.resolver import (
    ConventionResolver,
    MapResolver,
    PolicyResolver,
    ResolverCollection,
    import_string,
)
from warrant.domain.authorization.service import AuthorizationService
from warrant.domain.shared.error import ConfigurationError
from warrant.util.di.scope import Scope

logger = logging.getLogger(__name__)


class IdentityData(dict[str, Any]):
    """Raw attributes of the identity acting in the current request."""


def build_resolver(config: Config) -> PolicyResolver:
    """Build the resolver chain: explicit policies first, then conventions.

    Raises:
        ConfigurationError: If a configured resource type cannot be imported,
            or no resolver is enabled.
    """
    resolvers: list[PolicyResolver] = []

    if config.policies:
        map_resolver = MapResolver()
        for resource_path, policy_path in config.policies.items():
            try:
                resource_type = import_string(resource_path)
            except ImportError as e:
                raise ConfigurationError(
                    f"Resource type `{resource_path}` cannot be imported"
                ) from e
            map_resolver.map(resource_type, policy_path)
        resolvers.append(map_resolver)

    if config.use_conventions:
        resolvers.append(ConventionResolver(config.convention))

    if not resolvers:
        raise ConfigurationError("No policy resolvers configured")

    logger.info(
        "Policy resolvers configured: explicit=%d conventions=%s",
        len(config.policies),
        config.use_conventions,
    )
    return ResolverCollection(resolvers)


class AuthorizationProvider(Provider):
    """DI provider for the resolver chain, the service and request identities."""

    config = from_context(provides=Config, scope=Scope.APP)
    identity_data = from_context(provides=IdentityData, scope=Scope.REQUEST)

    authorization_service = provide(AuthorizationService, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_resolver(self, config: Config) -> PolicyResolver:
        """Provide the configured PolicyResolver chain."""
        return build_resolver(config)

    @provide(scope=Scope.REQUEST)
    def get_identity(
        self,
        service: AuthorizationService,
        data: IdentityData,
    ) -> IdentityDecorator:
        """Wrap the request's identity data for policy checks."""
        return IdentityDecorator(service, data)
