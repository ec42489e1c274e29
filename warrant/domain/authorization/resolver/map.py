"""MapResolver — explicit resource type -> policy registrations."""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, Union

from warrant.domain.authorization.resolver.base import PolicyResolver
from warrant.domain.shared.error import MissingPolicyError
from warrant.domain.shared.naming import type_name

logger = logging.getLogger(__name__)

PolicyFactory = Callable[[Any, "MapResolver"], Any]

# A policy class, an import path naming one, a factory, or a ready instance.
PolicySpec = Union[type, str, PolicyFactory, object]


def import_string(path: str) -> Any:
    """Import ``"pkg.module:Name"`` or ``"pkg.module.Name"``.

    Raises:
        ImportError: If the module or the attribute cannot be found.
    """
    module_path, sep, attr = path.partition(":")
    if not sep:
        module_path, _, attr = path.rpartition(".")
    if not module_path or not attr:
        raise ImportError(f"`{path}` is not a valid import path")

    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ImportError(f"Module `{module_path}` does not define `{attr}`") from e


def _is_factory(spec: Any) -> bool:
    return inspect.isroutine(spec) or isinstance(spec, functools.partial)


class MapResolver(PolicyResolver):
    """Resolves policies from an explicit resource type -> policy mapping.

    Lookup is by exact type: a subclass of a mapped type is not mapped.

    Example:
        resolver = MapResolver({Article: ArticlePolicy})
        resolver.map(Comment, lambda resource, resolver: CommentPolicy(strict=True))
    """

    def __init__(self, mapping: Mapping[type, PolicySpec] | None = None) -> None:
        self._map: dict[type, PolicySpec] = {}
        for resource_type, spec in (mapping or {}).items():
            self.map(resource_type, spec)

    def map(self, resource_type: type, spec: PolicySpec) -> MapResolver:
        """Register (or overwrite) the policy for ``resource_type``.

        Raises:
            TypeError: If ``resource_type`` is not a class or ``spec`` is None.
        """
        if not isinstance(resource_type, type):
            raise TypeError(f"Resource type must be a class, `{resource_type!r}` given.")
        if spec is None:
            raise TypeError(
                "Policy must be a class, an import path, a callable or an object, `None` given."
            )

        self._map[resource_type] = spec
        return self

    def get_policy(self, resource: Any) -> Any:
        resource_type = type(resource)
        try:
            spec = self._map[resource_type]
        except KeyError:
            raise MissingPolicyError(type_name(resource_type)) from None

        if isinstance(spec, str):
            try:
                spec = import_string(spec)
            except ImportError as e:
                raise MissingPolicyError(type_name(resource_type)) from e

        if isinstance(spec, type):
            policy = spec()
        elif _is_factory(spec):
            policy = spec(resource, self)
        else:
            policy = spec

        logger.debug(
            "Policy resolved from map: resource=%s policy=%s",
            type_name(resource_type),
            type_name(type(policy)),
        )
        return policy
