"""
Unit tests for the DI container wiring.
"""
from unittest.mock import MagicMock

import pytest

from user_service.application.use_cases.user import CreateUserUseCase, DeleteUserUseCase
from user_service.di.base_container import BaseContainer
from user_service.di.container import DIContainer
from user_service.di.providers.database_provider import CONNECTION_POOL
from user_service.domain.repositories.user_repository import UserRepository
from user_service.infrastructure.db.postgres_user_repository import PostgresUserRepository
from user_service.infrastructure.memory import InMemoryUserRepository


class TestBaseContainer:
    """Tests for BaseContainer"""

    def test_singleton_returns_same_instance(self):
        container = BaseContainer()
        instance = object()
        container.register_singleton("thing", instance)
        assert container.get("thing") is instance

    def test_factory_builds_new_instance(self):
        container = BaseContainer()
        container.register_factory("thing", object)
        assert container.get("thing") is not container.get("thing")

    def test_unknown_key_raises_value_error(self):
        with pytest.raises(ValueError, match="No dependency registered"):
            BaseContainer().get(UserRepository)


class TestDIContainer:
    """Tests for DIContainer"""

    def test_with_explicit_repository(self):
        repository = InMemoryUserRepository()
        container = DIContainer(user_repository=repository)
        assert container.get(UserRepository) is repository
        assert not container.is_registered(CONNECTION_POOL)
        assert container.get(CreateUserUseCase).user_repository is repository

    def test_with_connection_pool_builds_postgres_repository(self):
        pool = MagicMock()
        container = DIContainer(connection_pool=pool)
        repository = container.get(UserRepository)
        assert isinstance(repository, PostgresUserRepository)
        assert repository.connection_pool is pool
        assert container.get(DeleteUserUseCase).user_repository is repository

    def test_requires_storage(self):
        with pytest.raises(ValueError):
            DIContainer()
