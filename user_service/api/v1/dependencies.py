# External package imports
from fastapi import HTTPException, Request, status

# Local application imports
from ...di.base_container import BaseContainer


def get_container(request: Request) -> BaseContainer:
    """
    FastAPI dependency returning the application's DI container
    
    The container is built during startup and kept on ``app.state``.
    
    Raises:
        HTTPException: 503 if startup has not finished building it
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return container
