"""Error hierarchy for warrant.

Error layers:
- WarrantError: Base class for all warrant errors
- AuthorizationError: Access was denied to an identity
- ConfigurationError: Policies or resolvers are misconfigured, or a policy broke
  its contract. These signal programmer errors and are never retried.

Callers translate these into access-denied or internal-error responses at
their own boundary.
"""

from typing import Any


class WarrantError(Exception):
    """Base class for all warrant errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Authorization Errors (access denied)
# =============================================================================


class AuthorizationError(WarrantError):
    """Identity not authorized for this operation."""


class ForbiddenError(AuthorizationError):
    """A policy denied the requested action on a resource."""

    def __init__(self, action: str, resource_type: str) -> None:
        super().__init__(
            f"Identity is not authorized to perform `{action}` on `{resource_type}`.",
            code="access_denied",
        )
        self.action = action
        self.resource_type = resource_type


# =============================================================================
# Configuration Errors (contract violations)
# =============================================================================


class ConfigurationError(WarrantError):
    """System misconfiguration detected."""


class MissingPolicyError(ConfigurationError):
    """No resolver could produce a policy for a resource's type."""

    def __init__(
        self,
        resource_type: str,
        causes: tuple["MissingPolicyError", ...] = (),
    ) -> None:
        super().__init__(
            f"Policy for `{resource_type}` has not been defined.",
            code="missing_policy",
        )
        self.resource_type = resource_type
        self.causes = causes


class MissingMethodError(ConfigurationError):
    """The resolved policy has no decision or scope function for an action."""

    def __init__(self, method: str, action: str, policy: str) -> None:
        super().__init__(
            f"Method `{method}` for invoking action `{action}` has not been defined in `{policy}`.",
            code="missing_method",
        )
        self.method = method
        self.action = action
        self.policy = policy


class PreconditionError(ConfigurationError):
    """A policy's before hook returned something other than True, False or None."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            "Pre-authorization check must return `bool` or `null`.",
            code="invalid_precondition",
        )
        self.value = value
