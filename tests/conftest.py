"""
Shared pytest fixtures for user service tests.
"""
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from user_service.core.config import Settings
from user_service.infrastructure.memory import InMemoryUserRepository
from user_service.main import create_application


@pytest.fixture
def mock_env():
    """Fixture to set the database environment variables."""
    env_vars = {
        "STORAGE_BACKEND": "postgres",
        "DB_HOST": "localhost",
        "DB_PORT": "5432",
        "DB_USER": "test_user",
        "DB_PASSWORD": "test_password",
        "DB_NAME": "test_users_db",
        "DB_CONNECT_ATTEMPTS": "3",
        "DB_CONNECT_DELAY_SECONDS": "0",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def memory_repository():
    """Fresh in-memory repository."""
    return InMemoryUserRepository()


@pytest.fixture
def client(memory_repository):
    """Test client for an application backed by the in-memory repository."""
    application = create_application(settings=Settings(), user_repository=memory_repository)
    with TestClient(application) as c:
        yield c
