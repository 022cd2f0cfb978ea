# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Use case for deleting a user"""
    
    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository
    
    async def execute(self, user_id: int) -> None:
        """
        Delete a user by ID
        
        Raises:
            UserNotFoundError: If no user has that ID
        """
        await self.user_repository.delete_user(user_id)
        logger.info(f"Deleted user {user_id}")
