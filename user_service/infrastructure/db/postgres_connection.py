# Standard library imports
import logging

# External package imports
import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import AsyncConnectionPool, PoolTimeout
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

# Local application imports
from ...core.config import Settings

logger = logging.getLogger(__name__)


def build_conninfo(settings: Settings) -> str:
    """
    Build a libpq connection string from settings
    
    Args:
        settings: Validated application settings
        
    Returns:
        Connection string accepted by psycopg
    """
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        dbname=settings.db_name,
    )


async def _open_pool_once(settings: Settings) -> AsyncConnectionPool:
    """Open a pool and wait until its minimum number of connections is ready"""
    pool = AsyncConnectionPool(
        conninfo=build_conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        # Each repository call is a single independent statement
        kwargs={"autocommit": True},
        open=False,
    )
    try:
        await pool.open(wait=True, timeout=settings.db_connect_timeout_seconds)
    except BaseException:
        await pool.close()
        raise
    return pool


async def open_connection_pool(settings: Settings) -> AsyncConnectionPool:
    """
    Connect to PostgreSQL with a bounded number of attempts
    
    Attempts are separated by a fixed delay. When every attempt fails the last
    error is re-raised and startup is aborted.
    
    Args:
        settings: Validated application settings
        
    Returns:
        An open AsyncConnectionPool
        
    Raises:
        psycopg.OperationalError: If the database is still unreachable after
            ``settings.db_connect_attempts`` attempts
    """
    logger.info(
        f"Connecting to PostgreSQL at {settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"(up to {settings.db_connect_attempts} attempts)"
    )
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_fixed(settings.db_connect_delay_seconds),
        retry=retry_if_exception_type((psycopg.OperationalError, PoolTimeout)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            pool = await _open_pool_once(settings)
    
    logger.info("Connected to PostgreSQL")
    return pool
