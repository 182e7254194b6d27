"""FastAPI adapter for request identity resolution."""

from fastapi_request_identity.fastapi.context import (
    current_identity,
    get_identity_resolver,
    install_identity,
    sign_in,
    sign_out,
    signed_in,
)
from fastapi_request_identity.fastapi.guard import (
    guarded_route_class,
    middleware_route_class,
    require_authentication,
)

__all__ = [
    "current_identity",
    "get_identity_resolver",
    "guarded_route_class",
    "install_identity",
    "middleware_route_class",
    "require_authentication",
    "sign_in",
    "sign_out",
    "signed_in",
]
