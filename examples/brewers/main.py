"""Brewers API example demonstrating fastapi-request-identity.

Signed-in users (session cookie) and API clients (?token=...) can list
brewers; creating one needs a session or a private token. Anonymous
callers are redirected to /.

Run with:
    uvicorn main:app --reload

Available endpoints:
    GET  /                  - Public landing page
    POST /session/{id}      - Sign in as account {id}
    DELETE /session         - Sign out
    GET  /api/v1/brewers    - List brewers (public or private token)
    POST /api/v1/brewers    - Create a brewer (private token only)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from fastapi_request_identity import (
    Account,
    InMemoryAccountStore,
    current_identity,
    guarded_route_class,
    install_identity,
    sign_in,
    sign_out,
    signed_in,
)
from fastapi_request_identity.exceptions import AccountNotFoundError

logging.basicConfig(level=logging.INFO)

store = InMemoryAccountStore(
    [
        Account(id=1, name="ada", public_token="ada-public", private_token="ada-private"),
        Account(id=2, name="grace", public_token="grace-public", private_token="grace-private"),
    ]
)
brewers: list[dict[str, Any]] = []

app = FastAPI(title="Brewers Example")
app.add_middleware(SessionMiddleware, secret_key="change-me")
install_identity(app, store)


@app.get("/")
async def index(is_signed_in: bool = Depends(signed_in)) -> dict[str, Any]:
    return {"signed_in": is_signed_in}


@app.post("/session/{account_id}")
async def login(account_id: int, request: Request) -> dict[str, Any]:
    try:
        account = store.find_by_reference(account_id)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=404, detail="unknown account") from exc
    await sign_in(request, account)
    return {"user": account.name}


@app.delete("/session")
async def logout(request: Request) -> dict[str, Any]:
    await sign_out(request)
    return {"user": None}


api = APIRouter(prefix="/api/v1", route_class=guarded_route_class())


@api.get("/brewers")
async def list_brewers() -> dict[str, Any]:
    return {"brewers": brewers}


@api.post("/brewers", status_code=201)
async def create_brewer(
    name: str,
    user: Account = Depends(current_identity),
) -> dict[str, Any]:
    brewer = {"name": name, "user": user.name}
    brewers.append(brewer)
    return brewer


app.include_router(api)
