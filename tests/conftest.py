"""Shared pytest fixtures for fastapi-request-identity tests."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi import APIRouter, Depends, FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from fastapi_request_identity import (
    Account,
    IdentityConfig,
    InMemoryAccountStore,
    current_identity,
    guarded_route_class,
    install_identity,
    sign_in,
    sign_out,
    signed_in,
)

SESSION_SECRET = "test-session-secret"


@pytest.fixture
def ada() -> Account:
    return Account(id=1, name="ada", public_token="pub-ada", private_token="priv-ada")


@pytest.fixture
def grace() -> Account:
    return Account(id=2, name="grace", public_token="pub-grace", private_token="priv-grace")


@pytest.fixture
def store(ada: Account, grace: Account) -> InMemoryAccountStore:
    return InMemoryAccountStore([ada, grace])


@pytest.fixture
def spy_store(store: InMemoryAccountStore) -> MagicMock:
    """A store that delegates to ``store`` and records every lookup."""
    return MagicMock(wraps=store)


@pytest.fixture
def create_app(store: InMemoryAccountStore):
    """Build a FastAPI app with sessions, identity and a guarded router.

    Returns a callable that accepts an optional store and IdentityConfig.

    Routes:
        GET  /whoami            public; reports the resolved identity
        POST /session/{id}      signs the account in
        DELETE /session         signs out
        GET  /brewers           guarded
        POST /brewers           guarded
    """

    def _create(
        account_store: Any = None,
        config: IdentityConfig | None = None,
    ) -> FastAPI:
        app = FastAPI()
        app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)
        install_identity(app, account_store or store, config)
        app.state.handled = []

        @app.get("/whoami")
        async def whoami(
            user: Account | None = Depends(current_identity),
            is_signed_in: bool = Depends(signed_in),
        ) -> dict[str, Any]:
            return {"user": user.name if user else None, "signed_in": is_signed_in}

        @app.post("/session/{account_id}")
        async def login(account_id: int, request: Request) -> dict[str, Any]:
            account = request.app.state.identity_store.find_by_reference(account_id)
            await sign_in(request, account)
            return {"user": account.name}

        @app.delete("/session")
        async def logout(request: Request) -> dict[str, Any]:
            await sign_out(request)
            return {"user": None}

        guarded = APIRouter(route_class=guarded_route_class())

        @guarded.get("/brewers")
        async def list_brewers(
            request: Request,
            user: Account = Depends(current_identity),
        ) -> dict[str, Any]:
            request.app.state.handled.append(("GET", user.name))
            return {"brewers": [], "user": user.name}

        @guarded.post("/brewers", status_code=201)
        async def create_brewer(
            request: Request,
            user: Account = Depends(current_identity),
        ) -> dict[str, Any]:
            request.app.state.handled.append(("POST", user.name))
            return {"created_by": user.name}

        app.include_router(guarded)
        return app

    return _create
