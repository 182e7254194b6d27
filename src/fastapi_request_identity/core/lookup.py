"""Session and token lookups.

Both lookups return an account or None and never raise for missing input:
an absent session key, an empty token or a stale reference all mean
"no identity from this source".
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from fastapi_request_identity.config import DEFAULT_SESSION_KEY, DEFAULT_TOKEN_PARAM
from fastapi_request_identity.core.store import AccountStore
from fastapi_request_identity.exceptions import AccountNotFoundError

logger = logging.getLogger(__name__)


class RequestIntent(Enum):
    """Whether a request only reads state or may change it."""

    READ = "read"
    WRITE = "write"

    @classmethod
    def from_method(cls, method: str) -> "RequestIntent":
        """Map an HTTP method to an intent. Only GET counts as a read."""
        return cls.READ if method.upper() == "GET" else cls.WRITE


def lookup_from_session(
    session: Mapping[str, Any],
    store: AccountStore,
    *,
    key: str = DEFAULT_SESSION_KEY,
) -> Any | None:
    """Resolve the account referenced by the session.

    The store is only queried when the session holds a reference. A
    reference the store no longer knows is treated as no identity.

    Args:
        session: Deserialized session mapping.
        store: Account store to resolve the reference against.
        key: Session key holding the reference.

    Returns:
        The referenced account, or None.
    """
    reference = session.get(key)
    if reference is None:
        logger.debug("No identity reference in session", extra={"session_key": key})
        return None

    try:
        return store.find_by_reference(reference)
    except AccountNotFoundError:
        logger.warning(
            "Session references a missing account",
            extra={"session_key": key, "reference": reference},
        )
        return None


def lookup_from_token(
    params: Mapping[str, Any],
    intent: RequestIntent,
    store: AccountStore,
    *,
    param: str = DEFAULT_TOKEN_PARAM,
) -> Any | None:
    """Resolve the account owning the token in the request parameters.

    Reads accept public or private tokens. Writes accept private tokens
    only, so a token leaked through a shared link cannot change state.

    Args:
        params: Request parameters (query string merged with body fields).
        intent: READ for GET requests, WRITE for everything else.
        store: Account store to resolve the token against.
        param: Parameter name carrying the token.

    Returns:
        The token's account, or None.
    """
    token = params.get(param)
    if not isinstance(token, str) or not token:
        return None

    if intent is RequestIntent.READ:
        return store.find_by_public_or_private_token(token)
    return store.find_by_private_token(token)
