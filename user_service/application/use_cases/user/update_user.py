# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.user import User
from ...dto.user_dto import UserPayload, UserResponse
from .validation import require_name_and_email

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """Use case for replacing a user's name and email"""
    
    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository
    
    async def execute(self, user_id: int, request: UserPayload) -> UserResponse:
        """
        Update an existing user
        
        Args:
            user_id: ID taken from the request path
            request: Decoded request body; its id is overridden by ``user_id``
            
        Returns:
            UserResponse with the stored values
            
        Raises:
            InvalidUserInputError: If name or email is empty
            UserNotFoundError: If no user has that ID
            DuplicateEmailError: If another user already has the email
        """
        require_name_and_email(request)
        
        if request.id not in (0, user_id):
            logger.debug(f"Ignoring body id {request.id} in favour of path id {user_id}")
        
        user = User(id=user_id, name=request.name, email=request.email)
        await self.user_repository.update_user(user)
        
        logger.info(f"Updated user {user_id}")
        return UserResponse.from_user(user)
