"""Custom Dishka scopes for warrant."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Warrant dependency injection scopes.

    Hierarchy: APP -> REQUEST

    - APP: Application lifetime (resolvers and the authorization service)
    - REQUEST: One request, holding the identity acting in it
    """

    APP = new_scope("APP")
    REQUEST = new_scope("REQUEST")
