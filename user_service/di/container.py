# Standard library imports
from typing import Optional

# External package imports
from psycopg_pool import AsyncConnectionPool

# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    UserProvider,
)
from ..domain.repositories.user_repository import UserRepository


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.
    
    Registration order is important:
    1. Database connection pool (DatabaseProvider), PostgreSQL backend only
    2. Repositories (RepositoryProvider) - depends on database
    3. Use cases (UserProvider) - depend on repositories
    
    One container is built per application and stored on ``app.state``;
    nothing here is process-global.
    """
    
    def __init__(
        self,
        user_repository: Optional[UserRepository] = None,
        connection_pool: Optional[AsyncConnectionPool] = None,
    ) -> None:
        super().__init__()
        if user_repository is None and connection_pool is None:
            raise ValueError("Either a user repository or a connection pool is required")
        self.setup(user_repository, connection_pool)
    
    def setup(
        self,
        user_repository: Optional[UserRepository],
        connection_pool: Optional[AsyncConnectionPool],
    ) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → use cases
        """
        # Step 1: Register database connections (foundation)
        if connection_pool is not None:
            DatabaseProvider.register(self, connection_pool)
        
        # Step 2: Register repositories (depends on database)
        RepositoryProvider.register(self, user_repository)
        
        # Step 3: Register use cases (depends on repositories)
        UserProvider.register(self)
