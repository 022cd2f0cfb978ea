# Standard library imports
import logging
from typing import Awaitable, Callable, Dict

# External package imports
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

# Local application imports
from ...application.dto.user_dto import UserPayload
from ...application.use_cases.user.create_user import CreateUserUseCase
from ...application.use_cases.user.get_user import GetUserUseCase
from ...application.use_cases.user.list_users import ListUsersUseCase
from ...application.use_cases.user.update_user import UpdateUserUseCase
from ...application.use_cases.user.delete_user import DeleteUserUseCase
from ...di.base_container import BaseContainer
from ...domain.exceptions import ErrorKind, InvalidUserInputError, UserServiceError
from .dependencies import get_container
from .routing import Action, RouteMatch, USERS_PREFIX, parse_user_id, resolve_route

logger = logging.getLogger(__name__)


router = APIRouter(tags=["users"])

ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

INTERNAL_ERROR_MESSAGE = "Internal server error"

_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

Handler = Callable[[Request, RouteMatch, BaseContainer], Awaitable[Response]]


def status_for_kind(kind: ErrorKind) -> int:
    """HTTP status code for a classified error"""
    return _STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _to_http_exception(exception: UserServiceError) -> HTTPException:
    status_code = status_for_kind(exception.kind)
    if status_code >= 500:
        logger.error(f"Storage failure: {exception.message}", exc_info=exception)
        return HTTPException(status_code=status_code, detail=INTERNAL_ERROR_MESSAGE)
    return HTTPException(status_code=status_code, detail=exception.message)


def _require_method(request: Request, expected: str) -> None:
    if request.method.upper() != expected:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method not allowed",
            headers={"Allow": expected},
        )


async def _decode_user(request: Request) -> UserPayload:
    """
    Decode the request body as a user
    
    Raises:
        InvalidUserInputError: If the body is not a JSON object with
            correctly typed fields
    """
    body = await request.body()
    try:
        return UserPayload.model_validate_json(body)
    except ValidationError as exception:
        errors = exception.errors()
        reason = errors[0]["msg"] if errors else str(exception)
        logger.info(f"Rejected request body: {reason}")
        raise InvalidUserInputError(f"Invalid request body: {reason}") from exception


async def create_user(request: Request, match: RouteMatch, container: BaseContainer) -> Response:
    """POST /api/v1/users - 201 with the created user"""
    _require_method(request, "POST")
    payload = await _decode_user(request)
    
    create_user_use_case = container.get(CreateUserUseCase)
    user = await create_user_use_case.execute(payload)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=user.model_dump())


async def read_users(request: Request, match: RouteMatch, container: BaseContainer) -> Response:
    """
    GET /api/v1/users and GET /api/v1/users/{id}
    
    The collection is always encoded as a JSON array, ``[]`` when empty.
    """
    _require_method(request, "GET")
    
    if not match.is_item:
        list_users_use_case = container.get(ListUsersUseCase)
        users = await list_users_use_case.execute()
        return JSONResponse(content=[user.model_dump() for user in users])
    
    user_id = parse_user_id(match.user_id)
    get_user_use_case = container.get(GetUserUseCase)
    user = await get_user_use_case.execute(user_id)
    return JSONResponse(content=user.model_dump())


async def update_user(request: Request, match: RouteMatch, container: BaseContainer) -> Response:
    """PUT /api/v1/users/{id} - 200 with the updated user"""
    _require_method(request, "PUT")
    if not match.is_item:
        raise InvalidUserInputError("User ID is required for update")
    user_id = parse_user_id(match.user_id)
    payload = await _decode_user(request)
    
    update_user_use_case = container.get(UpdateUserUseCase)
    user = await update_user_use_case.execute(user_id, payload)
    return JSONResponse(content=user.model_dump())


async def delete_user(request: Request, match: RouteMatch, container: BaseContainer) -> Response:
    """DELETE /api/v1/users/{id} - 204 with an empty body"""
    _require_method(request, "DELETE")
    if not match.is_item:
        raise InvalidUserInputError("User ID is required for deletion")
    user_id = parse_user_id(match.user_id)
    
    delete_user_use_case = container.get(DeleteUserUseCase)
    await delete_user_use_case.execute(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


_HANDLERS: Dict[Action, Handler] = {
    Action.CREATE: create_user,
    Action.LIST: read_users,
    Action.GET: read_users,
    Action.UPDATE: update_user,
    Action.DELETE: delete_user,
}


def _rejection(match: RouteMatch) -> HTTPException:
    """HTTP error for a request the router did not hand to a handler"""
    if match.action == Action.METHOD_NOT_ALLOWED:
        return HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=match.detail,
            headers={"Allow": ", ".join(match.allowed_methods)},
        )
    if match.action == Action.BAD_REQUEST:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=match.detail)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=match.detail or "Not found")


@router.api_route("", methods=ALL_METHODS, include_in_schema=False)
@router.api_route("/{user_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def users_endpoint(
    request: Request,
    container: BaseContainer = Depends(get_container),
) -> Response:
    """
    Single entry point for the users collection
    
    Routing decisions are made by ``resolve_route``; classified errors raised
    by handlers, use cases or storage are translated to status codes here.
    
    Args:
        request: Incoming request
        container: DI container of the running application
        
    Returns:
        Response produced by the selected handler
    """
    match = resolve_route(request.method, request.url.path, USERS_PREFIX)
    handler = _HANDLERS.get(match.action)
    if handler is None:
        raise _rejection(match)
    
    try:
        return await handler(request, match, container)
    except HTTPException:
        raise
    except UserServiceError as exception:
        raise _to_http_exception(exception) from exception
    except Exception as exception:
        logger.error(
            f"Unexpected error handling {request.method} {request.url.path}: {exception}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        ) from exception
