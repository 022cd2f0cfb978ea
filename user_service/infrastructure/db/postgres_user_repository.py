# Standard library imports
import logging
from typing import List, Sequence

# External package imports
import psycopg
from psycopg import errors as pg_errors
from psycopg_pool import AsyncConnectionPool

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.constants import UserFields
from ...domain.exceptions import DuplicateEmailError, StorageError, UserNotFoundError

logger = logging.getLogger(__name__)


CREATE_USERS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {UserFields.TABLE} (
    {UserFields.ID} SERIAL PRIMARY KEY,
    {UserFields.NAME} VARCHAR(100) NOT NULL,
    {UserFields.EMAIL} VARCHAR(100) UNIQUE NOT NULL,
    {UserFields.CREATED_AT} TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
)
"""

_COLUMNS = f"{UserFields.ID}, {UserFields.NAME}, {UserFields.EMAIL}"

INSERT_USER = (
    f"INSERT INTO {UserFields.TABLE} ({UserFields.NAME}, {UserFields.EMAIL}) "
    f"VALUES (%s, %s) RETURNING {UserFields.ID}"
)
SELECT_USER_BY_ID = f"SELECT {_COLUMNS} FROM {UserFields.TABLE} WHERE {UserFields.ID} = %s"
SELECT_ALL_USERS = f"SELECT {_COLUMNS} FROM {UserFields.TABLE} ORDER BY {UserFields.ID} ASC"
UPDATE_USER = (
    f"UPDATE {UserFields.TABLE} SET {UserFields.NAME} = %s, {UserFields.EMAIL} = %s "
    f"WHERE {UserFields.ID} = %s"
)
DELETE_USER = f"DELETE FROM {UserFields.TABLE} WHERE {UserFields.ID} = %s"


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository"""
    
    def __init__(self, connection_pool: AsyncConnectionPool) -> None:
        self.connection_pool = connection_pool
    
    async def ensure_schema(self) -> None:
        """
        Create the users table if it does not exist yet
        
        Idempotent; run once at startup, never per request.
        
        Raises:
            StorageError: If the DDL statement fails
        """
        try:
            async with self.connection_pool.connection() as connection:
                await connection.execute(CREATE_USERS_TABLE)
        except psycopg.Error as e:
            raise StorageError("ensure_schema", e) from e
        logger.info(f"Table '{UserFields.TABLE}' checked/created")
    
    async def create_user(self, user: User) -> int:
        """
        Insert a new user
        
        Args:
            user: User to insert (its id is ignored)
            
        Returns:
            Identifier generated by the database
        """
        try:
            async with self.connection_pool.connection() as connection:
                cursor = await connection.execute(INSERT_USER, (user.name, user.email))
                row = await cursor.fetchone()
        except pg_errors.UniqueViolation as e:
            raise DuplicateEmailError(user.email) from e
        except psycopg.Error as e:
            raise StorageError("create_user", e) from e
        
        if row is None:
            raise StorageError("create_user", RuntimeError("INSERT returned no id"))
        return int(row[0])
    
    async def get_user_by_id(self, user_id: int) -> User:
        """
        Find user by ID
        
        Args:
            user_id: User ID to search for
            
        Returns:
            User domain model
            
        Raises:
            UserNotFoundError: If no row has that ID
        """
        try:
            async with self.connection_pool.connection() as connection:
                cursor = await connection.execute(SELECT_USER_BY_ID, (user_id,))
                row = await cursor.fetchone()
        except psycopg.Error as e:
            raise StorageError("get_user_by_id", e) from e
        
        if row is None:
            raise UserNotFoundError(user_id)
        return self._row_to_user(row)
    
    async def get_all_users(self) -> List[User]:
        """Return all users ordered by ascending ID"""
        try:
            async with self.connection_pool.connection() as connection:
                cursor = await connection.execute(SELECT_ALL_USERS)
                rows = await cursor.fetchall()
        except psycopg.Error as e:
            raise StorageError("get_all_users", e) from e
        
        return [self._row_to_user(row) for row in rows]
    
    async def update_user(self, user: User) -> None:
        """
        Update name and email of an existing user
        
        Raises:
            UserNotFoundError: If no row was affected
            DuplicateEmailError: If another user already has the email
        """
        try:
            async with self.connection_pool.connection() as connection:
                cursor = await connection.execute(UPDATE_USER, (user.name, user.email, user.id))
                affected = cursor.rowcount
        except pg_errors.UniqueViolation as e:
            raise DuplicateEmailError(user.email) from e
        except psycopg.Error as e:
            raise StorageError("update_user", e) from e
        
        if affected == 0:
            raise UserNotFoundError(user.id)
    
    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user by ID
        
        Raises:
            UserNotFoundError: If no row was affected
        """
        try:
            async with self.connection_pool.connection() as connection:
                cursor = await connection.execute(DELETE_USER, (user_id,))
                affected = cursor.rowcount
        except psycopg.Error as e:
            raise StorageError("delete_user", e) from e
        
        if affected == 0:
            raise UserNotFoundError(user_id)
    
    def _row_to_user(self, row: Sequence) -> User:
        """
        Convert a (id, name, email) row to User domain model
        
        Args:
            row: Row tuple in _COLUMNS order
            
        Returns:
            User domain model
        """
        return User(id=int(row[0]), name=row[1], email=row[2])
