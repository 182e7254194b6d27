"""Authentication guard for FastAPI routes.

The guard is a ``(request, call_next)`` middleware. Routes opt in through a
custom APIRoute class whose handler is wrapped with the middleware chain,
so the guard runs after FastAPI has matched the route and before the
endpoint executes.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from fastapi.routing import APIRoute

from fastapi_request_identity.core.guard import Deny, check_access
from fastapi_request_identity.core.middleware import build_middleware_chain, normalize_middleware
from fastapi_request_identity.fastapi.context import get_identity_resolver

logger = logging.getLogger(__name__)


async def require_authentication(
    request: Request,
    call_next: Callable[[Request], Any],
) -> Response:
    """Let signed-in callers through; redirect everyone else.

    A denied request gets a single redirect response and the rest of the
    chain, including the endpoint, is never called.
    """
    resolver = await get_identity_resolver(request)
    outcome = check_access(resolver)
    if isinstance(outcome, Deny):
        logger.info(
            "Access denied",
            extra={
                "method": request.method,
                "path": request.url.path,
                "location": outcome.location,
            },
        )
        return RedirectResponse(outcome.location, status_code=outcome.status_code)
    return await call_next(request)


def middleware_route_class(
    middleware_stack: Sequence[Callable[..., Any]],
) -> type[APIRoute]:
    """Create an APIRoute subclass that wraps handlers with middleware.

    The wrapping happens in get_route_handler(), so middleware receive the
    same Request object the endpoint's dependencies see.

    Args:
        middleware_stack: Ordered sequence of middleware (outermost first).

    Returns:
        A subclass of APIRoute with middleware wrapping.
    """
    stack = normalize_middleware(list(middleware_stack), source="middleware_route_class")

    class MiddlewareRoute(APIRoute):
        def get_route_handler(self) -> Callable[..., Any]:
            original_handler = super().get_route_handler()
            return build_middleware_chain(original_handler, stack)

    return MiddlewareRoute


def guarded_route_class(*middleware: Callable[..., Any]) -> type[APIRoute]:
    """Create an APIRoute subclass that requires a signed-in caller.

    Extra middleware run inside the guard, only for allowed requests.

    Example:
        router = APIRouter(route_class=guarded_route_class())

        @router.post("/brewers", status_code=201)
        async def create_brewer(user=Depends(current_identity)):
            ...
    """
    return middleware_route_class((require_authentication, *middleware))
