# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    UserProvider,
)


class DIContainer(BaseContainer):
    """
    Application container: users collection → MongoUserRepository → user use cases.

    Providers register in dependency order; each one resolves what the
    previous one registered.
    """

    def __init__(self) -> None:
        super().__init__()
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        UserProvider.register(self)


_container: DIContainer | None = None


def get_container() -> BaseContainer:
    """Build the application container on first use and return it afterwards"""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the container so its repository does not outlive a closed client"""
    global _container
    _container = None
