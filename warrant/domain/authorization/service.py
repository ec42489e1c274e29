"""AuthorizationService — the decision and scope-application protocol."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import logfire

from warrant.domain.authorization.policy import (
    BeforePolicy,
    action_table,
    decision_method,
    scope_method,
)
from warrant.domain.authorization.resolver.base import PolicyResolver
from warrant.domain.shared.error import ForbiddenError, MissingMethodError, PreconditionError
from warrant.domain.shared.naming import type_name

logger = logging.getLogger(__name__)


def _identity_id(identity: Any) -> str:
    if isinstance(identity, Mapping):
        value = identity.get("id")
    else:
        value = getattr(identity, "id", None)
    return "anonymous" if value is None else str(value)


class AuthorizationService:
    """Decides whether an identity may perform an action on a resource.

    Decisions are delegated to the policy the resolver returns for the
    resource. The service keeps no state between calls.
    """

    def __init__(self, resolver: PolicyResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> PolicyResolver:
        return self._resolver

    def can(self, identity: Any, action: str, resource: Any, *args: Any) -> bool:
        """Check whether ``identity`` may perform ``action`` on ``resource``.

        Extra positional ``args`` are passed to the decision function after
        the resource.

        Raises:
            MissingPolicyError: If no policy governs the resource's type.
            PreconditionError: If the policy's before hook returns a non-bool.
            MissingMethodError: If the policy cannot decide ``action``.
        """
        policy = self._resolver.get_policy(resource)

        if isinstance(policy, BeforePolicy):
            result = policy.before(identity, resource, action)
            if result is not None:
                if not isinstance(result, bool):
                    raise PreconditionError(result)
                logger.debug(
                    "Before hook settled decision: policy=%s action=%s result=%s",
                    type_name(type(policy)),
                    action,
                    result,
                )
                return result

        decide = action_table(type(policy)).decision_for(policy, action)
        if decide is None:
            raise MissingMethodError(decision_method(action), action, type_name(type(policy)))

        return decide(identity, resource, *args)

    def apply_scope(self, identity: Any, action: str, resource: Any, *args: Any) -> Any:
        """Apply the identity's visibility rules for ``action`` to ``resource``.

        Returns whatever the policy's scope function returns, normally the
        (possibly mutated) resource itself. The before hook does not apply.

        Raises:
            MissingPolicyError: If no policy governs the resource's type.
            MissingMethodError: If the policy has no scope for ``action``.
        """
        policy = self._resolver.get_policy(resource)

        scope = action_table(type(policy)).scope_for(policy, action)
        if scope is None:
            raise MissingMethodError(scope_method(action), action, type_name(type(policy)))

        return scope(identity, resource, *args)

    def authorize(self, identity: Any, action: str, resource: Any, *args: Any) -> None:
        """Like :meth:`can`, but raise instead of returning False.

        Raises:
            ForbiddenError: If the policy denies the action.
        """
        resource_type = type_name(type(resource))
        identity_id = _identity_id(identity)
        with logfire.span("authorize {action}", action=action, resource=resource_type):
            if not self.can(identity, action, resource, *args):
                logger.warning(
                    "Authorization denied: identity=%s action=%s resource=%s",
                    identity_id,
                    action,
                    resource_type,
                )
                raise ForbiddenError(action, resource_type)

            logger.info(
                "Authorization allowed: identity=%s action=%s resource=%s",
                identity_id,
                action,
                resource_type,
            )
