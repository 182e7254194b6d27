"""Request-scoped identity for FastAPI.

Each request gets its own IdentityResolver, created on first use and kept
on ``request.state``. Handlers reach it through dependencies instead of a
global, so concurrent requests never share resolution state.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from fastapi import Depends, FastAPI, Request

from fastapi_request_identity.config import IdentityConfig
from fastapi_request_identity.core.lookup import RequestIntent
from fastapi_request_identity.core.resolver import IdentityResolver
from fastapi_request_identity.core.store import AccountStore
from fastapi_request_identity.exceptions import IdentityConfigurationError

logger = logging.getLogger(__name__)

RESOLVER_STATE_ATTR = "identity_resolver"

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def install_identity(
    app: FastAPI,
    store: AccountStore,
    config: IdentityConfig | None = None,
) -> None:
    """Attach an account store and settings to an application.

    Sessions are read from ``request.session``, so Starlette's
    SessionMiddleware (or any middleware that fills ``scope["session"]``)
    should be installed as well.

    Example:
        app = FastAPI()
        app.add_middleware(SessionMiddleware, secret_key="...")
        install_identity(app, store, IdentityConfig(redirect_to="/login"))
    """
    app.state.identity_store = store
    app.state.identity_config = config or IdentityConfig()


def _installed(request: Request) -> tuple[AccountStore, IdentityConfig]:
    store = getattr(request.app.state, "identity_store", None)
    if store is None:
        raise IdentityConfigurationError(
            "No account store configured; call install_identity(app, store) first"
        )
    config = getattr(request.app.state, "identity_config", None) or IdentityConfig()
    return store, config


def _session(request: Request) -> MutableMapping[str, Any]:
    if "session" in request.scope:
        return request.session
    logger.debug(
        "No session middleware installed; using an empty request-local session",
        extra={"path": request.url.path},
    )
    return {}


async def request_params(request: Request) -> dict[str, Any]:
    """Collect request parameters: body fields overlaid by the query string.

    Bodies are only read for non-GET requests carrying form or JSON object
    payloads. Starlette caches the parsed body, so the route handler can
    still read it afterwards.
    """
    params: dict[str, Any] = {}
    if request.method.upper() != "GET":
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(_FORM_CONTENT_TYPES):
            form = await request.form()
            params.update(form.items())
        elif content_type.startswith("application/json"):
            try:
                body = await request.json()
            except ValueError:
                # Malformed bodies are rejected by the handler's own validation.
                body = None
            if isinstance(body, dict):
                params.update(body)
    params.update(request.query_params.items())
    return params


async def get_identity_resolver(request: Request) -> IdentityResolver:
    """Return the request's resolver, creating it on first use.

    Raises:
        IdentityConfigurationError: If install_identity() was not called.
    """
    resolver = getattr(request.state, RESOLVER_STATE_ATTR, None)
    if resolver is None:
        store, config = _installed(request)
        resolver = IdentityResolver(
            store,
            _session(request),
            params=await request_params(request),
            intent=RequestIntent.from_method(request.method),
            config=config,
        )
        setattr(request.state, RESOLVER_STATE_ATTR, resolver)
    return resolver


async def current_identity(
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Any | None:
    """Dependency: the signed-in account, or None."""
    return resolver.resolve_identity()


async def signed_in(resolver: IdentityResolver = Depends(get_identity_resolver)) -> bool:
    """Dependency: whether anyone is signed in."""
    return resolver.is_signed_in()


async def sign_in(request: Request, account: Any) -> None:
    """Remember ``account`` in the session for this and later requests.

    A falsy ``account`` signs the caller out, like ``set_identity``.
    """
    if not account:
        await sign_out(request)
        return
    resolver = await get_identity_resolver(request)
    resolver.set_identity(account)
    logger.info("Signed in", extra={"reference": account.id})


async def sign_out(request: Request) -> None:
    """Forget the signed-in account."""
    resolver = await get_identity_resolver(request)
    resolver.set_identity(False)
    logger.info("Signed out", extra={"path": request.url.path})
