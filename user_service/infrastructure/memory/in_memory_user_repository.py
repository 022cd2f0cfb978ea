"""
In-memory UserRepository
------------------------

Role:
- Back the API in tests and local development without a database.
- Mirror the PostgreSQL repository contract, including classified errors for
  missing ids and duplicate emails.

Note: One ``threading.Lock`` guards the whole map for every operation, reads
included. Nothing is awaited while the lock is held, so the store is safe both
from the event loop and from plain threads.
"""
# Standard library imports
import threading
from dataclasses import replace
from typing import Dict, List, Optional

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.exceptions import DuplicateEmailError, UserNotFoundError


class InMemoryUserRepository(UserRepository):
    """Lock-guarded dict implementation of UserRepository"""
    
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1
        # When set, every repository operation raises this error
        self.simulate_error: Optional[Exception] = None
    
    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
    
    async def create_user(self, user: User) -> int:
        with self._lock:
            self._raise_if_simulated()
            self._ensure_email_free(user.email)
            
            new_id = self._next_id
            self._next_id += 1
            self._users[new_id] = replace(user, id=new_id)
            return new_id
    
    async def get_user_by_id(self, user_id: int) -> User:
        with self._lock:
            self._raise_if_simulated()
            user = self._users.get(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return replace(user)
    
    async def get_all_users(self) -> List[User]:
        with self._lock:
            self._raise_if_simulated()
            return [replace(self._users[user_id]) for user_id in sorted(self._users)]
    
    async def update_user(self, user: User) -> None:
        with self._lock:
            self._raise_if_simulated()
            if user.id not in self._users:
                raise UserNotFoundError(user.id)
            self._ensure_email_free(user.email, exclude_id=user.id)
            self._users[user.id] = replace(user)
    
    async def delete_user(self, user_id: int) -> None:
        with self._lock:
            self._raise_if_simulated()
            if user_id not in self._users:
                raise UserNotFoundError(user_id)
            del self._users[user_id]
    
    def reset(self) -> None:
        """Drop all users, restart IDs at 1 and clear any injected error"""
        with self._lock:
            self._users = {}
            self._next_id = 1
            self.simulate_error = None
    
    def seed_user(self, user: User) -> User:
        """
        Store a user directly, bypassing email checks
        
        Args:
            user: User to store; an id of 0 gets the next free ID, an explicit
                id is kept and the counter is moved past it
            
        Returns:
            Copy of the stored user
        """
        with self._lock:
            if user.id == 0:
                stored = replace(user, id=self._next_id)
                self._next_id += 1
            else:
                stored = replace(user)
                if stored.id >= self._next_id:
                    self._next_id = stored.id + 1
            self._users[stored.id] = stored
            return replace(stored)
    
    def fail_with(self, error: Optional[Exception]) -> None:
        """Make every subsequent operation raise ``error`` (None to stop)"""
        with self._lock:
            self.simulate_error = error
    
    def _raise_if_simulated(self) -> None:
        if self.simulate_error is not None:
            raise self.simulate_error
    
    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        for user_id, existing in self._users.items():
            if user_id != exclude_id and existing.email == email:
                raise DuplicateEmailError(email)
