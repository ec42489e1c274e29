"""IdentityDecorator — identity data that can ask for authorization decisions."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warrant.domain.authorization.service import AuthorizationService


class IdentityDecorator(Mapping[str, Any]):
    """Wraps the acting identity's attributes together with the service.

    Policies read attributes through the mapping interface
    (``identity["role"]``, ``identity.get("id")``); there is no attribute
    proxy. The wrapper is immutable and created per request.
    """

    __slots__ = ("_service", "_data")

    def __init__(self, service: AuthorizationService, data: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_service", service)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self._service, self._data)

    def can(self, action: str, resource: Any, *args: Any) -> bool:
        """Check whether this identity may perform ``action`` on ``resource``."""
        return self._service.can(self, action, resource, *args)

    def apply_scope(self, action: str, resource: Any, *args: Any) -> Any:
        """Apply this identity's visibility rules for ``action`` to ``resource``."""
        return self._service.apply_scope(self, action, resource, *args)

    def authorize(self, action: str, resource: Any, *args: Any) -> None:
        """Raise ForbiddenError unless this identity may perform ``action``."""
        self._service.authorize(self, action, resource, *args)

    def get_original_data(self) -> Mapping[str, Any]:
        """The wrapped identity data, as given."""
        return self._data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._data)!r})"
