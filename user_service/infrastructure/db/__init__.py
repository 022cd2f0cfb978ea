from .postgres_connection import build_conninfo, open_connection_pool
from .postgres_user_repository import PostgresUserRepository

__all__ = [
    "build_conninfo",
    "open_connection_pool",
    "PostgresUserRepository",
]
