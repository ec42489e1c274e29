"""PolicyResolver — maps a resource to the policy that governs it."""

from abc import ABC, abstractmethod
from typing import Any


class PolicyResolver(ABC):
    """Base class for policy resolvers.

    The resolved policy depends only on the resource's runtime type, never on
    the identity or the action being checked.
    """

    @abstractmethod
    def get_policy(self, resource: Any) -> Any:
        """Return the policy for ``resource``.

        Raises:
            MissingPolicyError: If no policy can be determined.
        """
        ...
