# Standard library imports
import os
from typing import Final, List, Optional

# Local application imports
from ..domain.exceptions import ConfigurationError


STORAGE_BACKEND_POSTGRES: Final[str] = "postgres"
STORAGE_BACKEND_MEMORY: Final[str] = "memory"


class Settings:
    """
    Application settings loaded from environment variables.
    
    This class centralizes all configuration settings for the application.
    Database connection parameters have no defaults: they are required when
    the PostgreSQL backend is selected and are checked by ``validate()``.
    """
    
    def __init__(self) -> None:
        # Storage backend selection ("postgres" or "memory")
        self.storage_backend: Final[str] = os.getenv(
            "STORAGE_BACKEND", STORAGE_BACKEND_POSTGRES
        ).strip().lower()
        
        # Database Configuration
        self.db_host: Final[str] = os.getenv("DB_HOST", "")
        self.db_port: Final[str] = os.getenv("DB_PORT", "")
        self.db_user: Final[str] = os.getenv("DB_USER", "")
        self.db_password: Final[str] = os.getenv("DB_PASSWORD", "")
        self.db_name: Final[str] = os.getenv("DB_NAME", "")
        
        # Connection bootstrap
        self.db_connect_attempts: Final[int] = int(os.getenv("DB_CONNECT_ATTEMPTS", "5"))
        self.db_connect_delay_seconds: Final[float] = float(
            os.getenv("DB_CONNECT_DELAY_SECONDS", "5")
        )
        self.db_connect_timeout_seconds: Final[float] = float(
            os.getenv("DB_CONNECT_TIMEOUT_SECONDS", "10")
        )
        self.db_pool_min_size: Final[int] = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
        self.db_pool_max_size: Final[int] = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
        
        # HTTP server
        self.app_host: Final[str] = os.getenv("APP_HOST", "0.0.0.0")
        self.app_port: Final[int] = int(os.getenv("APP_PORT", "8080"))
        self.static_dir: Final[Optional[str]] = os.getenv("STATIC_DIR") or None
        
        # Logging
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
    
    @property
    def uses_postgres(self) -> bool:
        return self.storage_backend == STORAGE_BACKEND_POSTGRES
    
    def missing_database_settings(self) -> List[str]:
        """Names of required database variables that are not set"""
        required = {
            "DB_HOST": self.db_host,
            "DB_PORT": self.db_port,
            "DB_USER": self.db_user,
            "DB_PASSWORD": self.db_password,
            "DB_NAME": self.db_name,
        }
        return [name for name, value in required.items() if not value]
    
    def validate(self) -> None:
        """
        Fail fast on configuration the process cannot start with
        
        Raises:
            ConfigurationError: If the backend is unknown, a required database
                variable is missing, or a numeric setting is out of range
        """
        if self.storage_backend not in (STORAGE_BACKEND_POSTGRES, STORAGE_BACKEND_MEMORY):
            raise ConfigurationError(
                f"Unknown STORAGE_BACKEND '{self.storage_backend}' "
                f"(expected '{STORAGE_BACKEND_POSTGRES}' or '{STORAGE_BACKEND_MEMORY}')"
            )
        
        if self.uses_postgres:
            missing = self.missing_database_settings()
            if missing:
                raise ConfigurationError(
                    f"Missing required environment variables: {', '.join(missing)}"
                )
            if not self.db_port.isdigit():
                raise ConfigurationError(f"DB_PORT must be a number, got '{self.db_port}'")
        
        if self.db_connect_attempts < 1:
            raise ConfigurationError("DB_CONNECT_ATTEMPTS must be at least 1")
        if self.db_pool_min_size < 1 or self.db_pool_max_size < self.db_pool_min_size:
            raise ConfigurationError("DB_POOL_MIN_SIZE/DB_POOL_MAX_SIZE are inconsistent")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)
    
    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
