"""Naming helpers shared by resolvers and the decision protocol."""

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def type_name(cls: type) -> str:
    """Fully qualified name of a class, e.g. ``blog.model.entity.Article``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def snake_case(name: str) -> str:
    """Convert a class name to a module name (``ArticlesTable`` -> ``articles_table``)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()
