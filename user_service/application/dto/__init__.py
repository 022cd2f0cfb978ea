from .user_dto import UserPayload, UserResponse

__all__ = [
    "UserPayload",
    "UserResponse",
]
