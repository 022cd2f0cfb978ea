"""
Integration tests for application startup (lifespan) and static files.
"""
import os
from unittest.mock import AsyncMock, MagicMock, patch

import psycopg
import pytest

pytestmark = pytest.mark.integration

from fastapi.testclient import TestClient

from user_service import main as main_module
from user_service.core.config import Settings
from user_service.domain.exceptions import ConfigurationError
from user_service.domain.repositories.user_repository import UserRepository
from user_service.infrastructure.memory import InMemoryUserRepository


class TestLifespan:
    """Tests for the startup sequence"""

    def test_memory_backend_from_settings(self):
        with patch.dict(os.environ, {"STORAGE_BACKEND": "memory"}, clear=True):
            settings = Settings()
        application = main_module.create_application(settings=settings)
        with TestClient(application) as c:
            assert isinstance(application.state.container.get(UserRepository), InMemoryUserRepository)
            assert c.post("/api/v1/users", json={"name": "A", "email": "a@x.com"}).status_code == 201

    def test_missing_database_config_aborts_startup(self):
        with patch.dict(os.environ, {"STORAGE_BACKEND": "postgres"}, clear=True):
            settings = Settings()
        application = main_module.create_application(settings=settings)
        with pytest.raises(ConfigurationError):
            with TestClient(application):
                pass

    def test_postgres_startup_opens_pool_and_ensures_schema(self, mock_env):
        pool = MagicMock()
        pool.close = AsyncMock()
        ensure_schema = AsyncMock()
        with patch.object(main_module, "open_connection_pool", AsyncMock(return_value=pool)), patch.object(
            main_module.PostgresUserRepository, "ensure_schema", ensure_schema
        ):
            application = main_module.create_application(settings=Settings())
            with TestClient(application):
                ensure_schema.assert_awaited_once()
        pool.close.assert_awaited_once()

    def test_exhausted_connection_retries_abort_startup(self, mock_env):
        failing = AsyncMock(side_effect=psycopg.OperationalError("refused"))
        with patch.object(main_module, "open_connection_pool", failing):
            application = main_module.create_application(settings=Settings())
            with pytest.raises(psycopg.OperationalError):
                with TestClient(application):
                    pass


class TestStaticFiles:
    """Tests for the optional static file mount"""

    def test_serves_static_files_without_shadowing_api(self, tmp_path):
        (tmp_path / "index.html").write_text("<h1>Users</h1>")
        with patch.dict(os.environ, {"STATIC_DIR": str(tmp_path)}, clear=True):
            settings = Settings()
        application = main_module.create_application(
            settings=settings, user_repository=InMemoryUserRepository()
        )
        with TestClient(application) as c:
            assert "Users" in c.get("/").text
            assert c.get("/api/v1/users").json() == []
