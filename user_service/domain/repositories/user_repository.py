from abc import ABC, abstractmethod
from typing import List
from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface - defines contract for user data access.

    Implementations raise classified errors from ``domain.exceptions``:
    ``UserNotFoundError`` for a missing id, ``DuplicateEmailError`` when an
    email is already owned by another user and ``StorageError`` for anything
    else.
    """

    @abstractmethod
    async def create_user(self, user: User) -> int:
        """Persist a new user and return the identifier assigned to it"""
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> User:
        """Find user by ID"""
        pass

    @abstractmethod
    async def get_all_users(self) -> List[User]:
        """Return every user ordered by ascending ID (empty list when none)"""
        pass

    @abstractmethod
    async def update_user(self, user: User) -> None:
        """Replace name and email of the user stored under ``user.id``"""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> None:
        """Remove the user with the given ID"""
        pass
