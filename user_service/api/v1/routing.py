"""
Request routing for the users collection.

``resolve_route`` is a pure function of (method, path): it never touches
storage and keeps no state, so every dispatch decision can be tested without
an application. The identifier is returned raw; ``parse_user_id`` turns it
into an integer once a handler needs it.
"""
# Standard library imports
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Local application imports
from ...domain.exceptions import InvalidUserInputError


USERS_PREFIX = "/api/v1/users"

COLLECTION_METHODS: Tuple[str, ...] = ("GET", "POST")
ITEM_METHODS: Tuple[str, ...] = ("GET", "PUT", "DELETE")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1
_USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class Action(str, Enum):
    """Outcome of routing a request"""
    CREATE = "create"
    LIST = "list"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteMatch:
    action: Action
    user_id: Optional[str] = None
    allowed_methods: Tuple[str, ...] = ()
    detail: Optional[str] = None

    @property
    def is_item(self) -> bool:
        return self.user_id is not None


def split_user_path(path: str, prefix: str = USERS_PREFIX) -> Optional[str]:
    """
    Strip the collection prefix and surrounding slashes from ``path``
    
    Returns:
        "" for the collection itself, the remainder for an item path, or None
        when the path does not belong to the collection at all
    """
    if path != prefix and not path.startswith(prefix + "/"):
        return None
    return path[len(prefix):].strip("/")


def resolve_route(method: str, path: str, prefix: str = USERS_PREFIX) -> RouteMatch:
    """
    Map an HTTP method and path to the operation that should handle it
    
    Args:
        method: HTTP method, any case
        path: Request path without query string
        prefix: Collection path
        
    Returns:
        RouteMatch describing the action, the raw identifier for item paths
        and, for rejections, the allowed methods or an error detail
    """
    remainder = split_user_path(path, prefix)
    if remainder is None:
        return RouteMatch(Action.NOT_FOUND, detail="Not found")
    
    method = method.upper()
    
    if remainder == "":
        if method == "GET":
            return RouteMatch(Action.LIST)
        if method == "POST":
            return RouteMatch(Action.CREATE)
        if method == "PUT":
            return RouteMatch(Action.BAD_REQUEST, detail="User ID is required for update")
        if method == "DELETE":
            return RouteMatch(Action.BAD_REQUEST, detail="User ID is required for deletion")
        return RouteMatch(
            Action.METHOD_NOT_ALLOWED,
            allowed_methods=COLLECTION_METHODS,
            detail="Method not allowed",
        )
    
    if method == "GET":
        return RouteMatch(Action.GET, user_id=remainder)
    if method == "PUT":
        return RouteMatch(Action.UPDATE, user_id=remainder)
    if method == "DELETE":
        return RouteMatch(Action.DELETE, user_id=remainder)
    return RouteMatch(
        Action.METHOD_NOT_ALLOWED,
        user_id=remainder,
        allowed_methods=ITEM_METHODS,
        detail="Method not allowed",
    )


def parse_user_id(raw: Optional[str]) -> int:
    """
    Parse a path identifier as a signed 64-bit base-10 integer
    
    Raises:
        InvalidUserInputError: If the identifier is missing, not a plain
            decimal number, or outside the 64-bit range
    """
    if raw is None or raw == "":
        raise InvalidUserInputError("User ID is required")
    if not _USER_ID_PATTERN.fullmatch(raw):
        raise InvalidUserInputError(f"Invalid user ID '{raw}'")
    
    value = int(raw)
    if value < _INT64_MIN or value > _INT64_MAX:
        raise InvalidUserInputError(f"Invalid user ID '{raw}'")
    return value
