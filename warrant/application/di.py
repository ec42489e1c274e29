from dishka import Container, make_container

from warrant.config import Config
from warrant.domain.authorization.util.di.provider import AuthorizationProvider
from warrant.util.di.scope import Scope


def create_container(config: Config | None = None) -> Container:
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()

    return make_container(
        AuthorizationProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
