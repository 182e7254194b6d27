"""Request identity resolution for FastAPI: session first, API token second."""

# Core types: framework-free resolution, lookups and guard decisions
from fastapi_request_identity.config import IdentityConfig
from fastapi_request_identity.core.guard import Allow, Deny, access_denied, check_access
from fastapi_request_identity.core.lookup import (
    RequestIntent,
    lookup_from_session,
    lookup_from_token,
)
from fastapi_request_identity.core.middleware import build_middleware_chain
from fastapi_request_identity.core.resolver import IdentityResolver, Resolution
from fastapi_request_identity.core.store import (
    Account,
    AccountStore,
    Identity,
    InMemoryAccountStore,
)

# Exceptions: for error handling
from fastapi_request_identity.exceptions import (
    AccountNotFoundError,
    IdentityConfigurationError,
    MiddlewareValidationError,
    RequestIdentityError,
)

# FastAPI integration: the primary API
from fastapi_request_identity.fastapi import (
    current_identity,
    get_identity_resolver,
    guarded_route_class,
    install_identity,
    middleware_route_class,
    require_authentication,
    sign_in,
    sign_out,
    signed_in,
)

__all__ = [
    # Primary API
    "install_identity",
    "current_identity",
    "signed_in",
    "sign_in",
    "sign_out",
    "require_authentication",
    "guarded_route_class",
    "middleware_route_class",
    "get_identity_resolver",
    # Core types
    "Account",
    "AccountStore",
    "Allow",
    "Deny",
    "Identity",
    "IdentityConfig",
    "IdentityResolver",
    "InMemoryAccountStore",
    "RequestIntent",
    "Resolution",
    "access_denied",
    "build_middleware_chain",
    "check_access",
    "lookup_from_session",
    "lookup_from_token",
    # Exceptions
    "AccountNotFoundError",
    "IdentityConfigurationError",
    "MiddlewareValidationError",
    "RequestIdentityError",
]

__version__ = "0.1.0"
