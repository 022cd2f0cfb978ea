# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.user import User
from ...dto.user_dto import UserPayload, UserResponse
from .validation import require_name_and_email

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """Use case for creating a new user"""
    
    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository
    
    async def execute(self, request: UserPayload) -> UserResponse:
        """
        Create a new user
        
        Args:
            request: Decoded request body; any id it carries is ignored
            
        Returns:
            UserResponse with the identifier assigned by storage
            
        Raises:
            InvalidUserInputError: If name or email is empty
            DuplicateEmailError: If the email is already taken
        """
        require_name_and_email(request)
        
        new_user = User(name=request.name, email=request.email)
        user_id = await self.user_repository.create_user(new_user)
        
        logger.info(f"Created user {user_id}")
        return UserResponse(id=user_id, name=new_user.name, email=new_user.email)
