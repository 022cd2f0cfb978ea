from typing import TYPE_CHECKING

from psycopg_pool import AsyncConnectionPool

if TYPE_CHECKING:
    from ..base_container import BaseContainer


CONNECTION_POOL = "connection_pool"


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for the PostgreSQL pool"""
    
    @staticmethod
    def register(container: "BaseContainer", connection_pool: AsyncConnectionPool) -> None:
        """
        Register the connection pool opened during application startup.
        Repositories look it up under ``CONNECTION_POOL``.
        """
        container.register_singleton(CONNECTION_POOL, connection_pool)
