from pydantic import BaseModel, ConfigDict

from ...domain.models.user import User


class UserPayload(BaseModel):
    """DTO for create/update request bodies

    Missing fields decode to their zero values so presence checks can report
    them; wrong JSON types are rejected at decode time.
    """
    model_config = ConfigDict(strict=True)

    id: int = 0
    name: str = ""
    email: str = ""


class UserResponse(BaseModel):
    """DTO for user response"""
    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)
