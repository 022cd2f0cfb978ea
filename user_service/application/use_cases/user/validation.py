# Local application imports
from ....domain.exceptions import InvalidUserInputError
from ...dto.user_dto import UserPayload


def require_name_and_email(payload: UserPayload) -> None:
    """
    Presence check shared by create and update
    
    Raises:
        InvalidUserInputError: If name or email is empty
    """
    if payload.name == "" or payload.email == "":
        raise InvalidUserInputError("Name and email are required")
