from .user_controller import router as user_router
from .routing import USERS_PREFIX


__all__ = ["user_router", "USERS_PREFIX"]
