"""Policy shape: the optional before hook and per-class action tables.

A policy is any object that exposes decision functions and/or scope functions
for a resource type. Functions are attached to action names in one of two ways:

- by name: ``can_<action>`` decides ``action``, ``scope_<action>`` scopes it;
- by registration: ``@decides("publish")`` / ``@scopes("index")``.

``@decides(ANY_ACTION)`` and ``@scopes(ANY_ACTION)`` register a single default
variant. It receives the action name after the resource:
``fn(identity, resource, action, *args)``.

Tables are built once per policy class and cached.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from warrant.domain.shared.error import ConfigurationError
from warrant.domain.shared.naming import type_name

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ANY_ACTION = "*"

DECISION_PREFIX = "can_"
SCOPE_PREFIX = "scope_"

_DECIDES_MARKER = "__warrant_decides__"
_SCOPES_MARKER = "__warrant_scopes__"


@runtime_checkable
class BeforePolicy(Protocol):
    """Policy with a pre-authorization hook.

    ``before`` returns True or False to settle the decision immediately, or
    None to fall through to the action's decision function.
    """

    def before(self, identity: Any, resource: Any, action: str) -> bool | None: ...


def decides(*actions: str) -> Callable[[F], F]:
    """Register a policy method as the decision function for ``actions``."""
    return _register(_DECIDES_MARKER, actions)


def scopes(*actions: str) -> Callable[[F], F]:
    """Register a policy method as the scope function for ``actions``."""
    return _register(_SCOPES_MARKER, actions)


def _register(marker: str, actions: tuple[str, ...]) -> Callable[[F], F]:
    if not actions:
        raise TypeError("At least one action name is required")

    def decorator(fn: F) -> F:
        target = getattr(fn, "__func__", fn)
        setattr(target, marker, (*getattr(target, marker, ()), *actions))
        return fn

    return decorator


def decision_method(action: str) -> str:
    """Conventional decision method name for an action (``add`` -> ``can_add``)."""
    return f"{DECISION_PREFIX}{action}"


def scope_method(action: str) -> str:
    """Conventional scope method name for an action (``index`` -> ``scope_index``)."""
    return f"{SCOPE_PREFIX}{action}"


@dataclass(frozen=True)
class ActionTable:
    """Action name -> attribute name, for decisions and scopes of one policy class."""

    policy: type
    decisions: Mapping[str, str]
    scopes: Mapping[str, str]

    def decision_for(self, policy: Any, action: str) -> Callable[..., Any] | None:
        """Bound decision function for ``action``, or None."""
        return self._bind(self.decisions, policy, action, decision_method(action))

    def scope_for(self, policy: Any, action: str) -> Callable[..., Any] | None:
        """Bound scope function for ``action``, or None."""
        return self._bind(self.scopes, policy, action, scope_method(action))

    @staticmethod
    def _bind(
        entries: Mapping[str, str], policy: Any, action: str, method: str
    ) -> Callable[..., Any] | None:
        name = entries.get(action)
        if name is not None:
            return getattr(policy, name)

        # Functions set on the instance are not in the class table.
        bound = getattr(policy, method, None)
        if callable(bound):
            return bound

        default_name = entries.get(ANY_ACTION)
        if default_name is None:
            return None

        default = getattr(policy, default_name)

        def dispatch(identity: Any, resource: Any, *args: Any) -> Any:
            return default(identity, resource, action, *args)

        return dispatch


@functools.cache
def action_table(policy_cls: type) -> ActionTable:
    """Build (once) the action table of a policy class."""
    decisions: dict[str, str] = {}
    scopes_: dict[str, str] = {}
    registered: list[tuple[int, dict[str, str], str, str]] = []
    mro = policy_cls.__mro__

    for name in dir(policy_cls):
        if name.startswith("__"):
            continue
        attr = inspect.getattr_static(policy_cls, name)
        func = getattr(attr, "__func__", attr)
        if not callable(func):
            continue

        if name.startswith(DECISION_PREFIX) and len(name) > len(DECISION_PREFIX):
            decisions[name[len(DECISION_PREFIX) :]] = name
        elif name.startswith(SCOPE_PREFIX) and len(name) > len(SCOPE_PREFIX):
            scopes_[name[len(SCOPE_PREFIX) :]] = name

        depth = next((i for i, klass in enumerate(mro) if name in vars(klass)), 0)
        for action in getattr(func, _DECIDES_MARKER, ()):
            registered.append((depth, decisions, action, name))
        for action in getattr(func, _SCOPES_MARKER, ()):
            registered.append((depth, scopes_, action, name))

    # Registrations win over names and subclasses win over bases. Two
    # registrations for one action on the same class conflict.
    registered.sort(key=lambda entry: -entry[0])
    claimed: dict[tuple[int, str], tuple[int, str]] = {}
    for depth, entries, action, name in registered:
        key = (id(entries), action)
        previous = claimed.get(key)
        if previous is not None and previous[0] == depth and previous[1] != name:
            raise ConfigurationError(
                f"Action `{action}` is registered by both `{previous[1]}` and `{name}` "
                f"in `{type_name(mro[depth])}`."
            )
        claimed[key] = (depth, name)
        entries[action] = name

    logger.debug(
        "Action table built: policy=%s decisions=%s scopes=%s",
        type_name(policy_cls),
        sorted(decisions),
        sorted(scopes_),
    )
    return ActionTable(policy=policy_cls, decisions=decisions, scopes=scopes_)


class Policy:
    """Optional base class for policies.

    Subclassing is not required; any object with the right methods is a policy.
    Subclasses get their action table built at class creation, so conflicting
    registrations fail on import.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        action_table(cls)

    @classmethod
    def actions(cls) -> ActionTable:
        """The action table of this policy class."""
        return action_table(cls)
