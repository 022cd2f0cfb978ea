from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .user_provider import UserProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "UserProvider",
]
