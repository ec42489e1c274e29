"""Authorization: policies, resolvers, the decision service and identities."""

from .identity import IdentityDecorator
from .policy import ANY_ACTION, ActionTable, BeforePolicy, Policy, action_table, decides, scopes
from .resolver import (
    ConventionResolver,
    MapResolver,
    NamingConvention,
    PolicyResolver,
    ResolverCollection,
)
from .service import AuthorizationService

__all__ = [
    "ANY_ACTION",
    "ActionTable",
    "AuthorizationService",
    "BeforePolicy",
    "ConventionResolver",
    "IdentityDecorator",
    "MapResolver",
    "NamingConvention",
    "Policy",
    "PolicyResolver",
    "ResolverCollection",
    "action_table",
    "decides",
    "scopes",
]
