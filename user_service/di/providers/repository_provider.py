from typing import TYPE_CHECKING, Optional
from ...domain.repositories.user_repository import UserRepository
from ...infrastructure.db.postgres_user_repository import PostgresUserRepository
from .database_provider import CONNECTION_POOL

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""
    
    @staticmethod
    def register(
        container: "BaseContainer",
        user_repository: Optional[UserRepository] = None,
    ) -> None:
        """
        Register the UserRepository implementation.
        An explicitly supplied repository (in-memory store, test double) wins;
        otherwise a PostgreSQL repository is built on the registered pool.
        """
        if user_repository is None:
            user_repository = PostgresUserRepository(
                connection_pool=container.get(CONNECTION_POOL)
            )
        
        # Domain interface -> Infrastructure implementation
        container.register_singleton(UserRepository, user_repository)
