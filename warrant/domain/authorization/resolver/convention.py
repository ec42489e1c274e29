"""ConventionResolver — locate policies from the resource's module path.

Resources living in ``<namespace>.<entity_segment>`` (``blog.model.entity``)
or ``<namespace>.<repository_segment>`` (``blog.model.table``) get their policy
from ``<namespace>.<policy_segment>`` under the name ``<Name><suffix>``:

    blog.model.entity.Article        ->  blog.policy.article:ArticlePolicy
    blog.model.table.ArticlesTable   ->  blog.policy.articles_table:ArticlesTablePolicy

The application namespace may override policies of other namespaces
(``app.policy.blog.article:ArticlePolicy`` wins over the one shipped by ``blog``),
and ``overrides`` redirects a namespace to another one.
"""

from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Query
from sqlalchemy.sql import Select

from warrant.domain.authorization.resolver.base import PolicyResolver
from warrant.domain.shared.error import MissingPolicyError
from warrant.domain.shared.naming import snake_case, type_name

logger = logging.getLogger(__name__)


class NamingConvention(BaseModel):
    """How resource module paths translate to policy module paths."""

    model_config = ConfigDict(frozen=True)

    app_namespace: str = "app"  # Checked first for application-level overrides
    entity_segment: str = "model.entity"
    repository_segment: str = "model.table"
    policy_segment: str = "policy"
    suffix: str = "Policy"
    overrides: dict[str, str] = {}  # namespace -> namespace holding its policies


class PolicyLocation(NamedTuple):
    """A candidate policy class: module path + attribute name."""

    module: str
    name: str

    def __str__(self) -> str:
        return f"{self.module}:{self.name}"


def _namespace_of(module: str, convention: NamingConvention) -> str | None:
    for segment in (convention.entity_segment, convention.repository_segment):
        marker = f".{segment}"
        if module.endswith(marker):
            return module[: -len(marker)]
        index = module.find(f"{marker}.")
        if index > 0:
            return module[:index]
    return None


def candidate_policy_names(
    resource_type: type, convention: NamingConvention
) -> list[PolicyLocation]:
    """Candidate policy locations for ``resource_type``, most specific first.

    Returns an empty list for types outside the entity and repository segments.
    """
    namespace = _namespace_of(resource_type.__module__, convention)
    if not namespace:
        return []

    tiers: list[str] = []
    if namespace != convention.app_namespace:
        tiers.append(f"{convention.app_namespace}.{convention.policy_segment}.{namespace}")
    origin = convention.overrides.get(namespace, namespace)
    tiers.append(f"{origin}.{convention.policy_segment}")

    name = resource_type.__name__
    policy_name = f"{name}{convention.suffix}"
    candidates: list[PolicyLocation] = []
    for tier in tiers:
        candidates.append(PolicyLocation(f"{tier}.{snake_case(name)}", policy_name))
        candidates.append(PolicyLocation(tier, policy_name))
    return candidates


def _import_candidate(module_path: str) -> ModuleType | None:
    """Import a candidate module; None if it (or a parent package) does not exist.

    Import errors raised from inside an existing module propagate.
    """
    try:
        return importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        missing = e.name or ""
        if module_path == missing or module_path.startswith(f"{missing}."):
            return None
        raise


class ConventionResolver(PolicyResolver):
    """Resolves policies by naming convention instead of explicit registration.

    Queries resolve through the record type they select: a SQLAlchemy
    ``Select``/``Query`` via its first selected entity, any other object with a
    ``repository()`` accessor via the repository it returns.
    """

    def __init__(
        self,
        convention: NamingConvention | None = None,
        *,
        app_namespace: str | None = None,
        overrides: dict[str, str] | None = None,
    ) -> None:
        convention = convention or NamingConvention()
        updates: dict[str, Any] = {}
        if app_namespace is not None:
            updates["app_namespace"] = app_namespace
        if overrides is not None:
            updates["overrides"] = overrides
        self._convention = convention.model_copy(update=updates) if updates else convention

    @property
    def convention(self) -> NamingConvention:
        return self._convention

    def get_policy(self, resource: Any) -> Any:
        resource_type = self._resource_type(resource)

        for location in candidate_policy_names(resource_type, self._convention):
            module = _import_candidate(location.module)
            if module is None:
                continue
            policy_cls = getattr(module, location.name, None)
            if isinstance(policy_cls, type):
                logger.debug(
                    "Policy resolved by convention: resource=%s policy=%s",
                    type_name(resource_type),
                    location,
                )
                return policy_cls()

        raise MissingPolicyError(type_name(resource_type))

    def _resource_type(self, resource: Any) -> type:
        if isinstance(resource, (Select, Query)):
            descriptions = resource.column_descriptions
            entity = descriptions[0].get("entity") if descriptions else None
            if not isinstance(entity, type):
                raise MissingPolicyError(type_name(type(resource)))
            return entity

        repository = getattr(resource, "repository", None)
        if callable(repository):
            repo = repository()
            return repo if isinstance(repo, type) else type(repo)

        return type(resource)
