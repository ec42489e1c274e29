"""Policy resolvers."""

from .base import PolicyResolver
from .collection import ResolverCollection
from .convention import ConventionResolver, NamingConvention, PolicyLocation, candidate_policy_names
from .map import MapResolver, import_string

__all__ = [
    "ConventionResolver",
    "MapResolver",
    "NamingConvention",
    "PolicyLocation",
    "PolicyResolver",
    "ResolverCollection",
    "candidate_policy_names",
    "import_string",
]
