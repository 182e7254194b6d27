"""Per-request identity resolution with memoization."""

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Literal

from fastapi_request_identity.config import IdentityConfig
from fastapi_request_identity.core.lookup import (
    RequestIntent,
    lookup_from_session,
    lookup_from_token,
)
from fastapi_request_identity.core.store import AccountStore, Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """A settled resolution. ``identity`` is None when nobody is signed in."""

    identity: Any | None = None


class IdentityResolver:
    """Resolves who is making a request, at most once per request.

    The session is consulted first; the request token only when the
    session yields nothing. The outcome, including "nobody", is cached in
    ``resolution`` so later checks in the same request never touch the
    session or the store again.

    Attributes:
        store: Account store used by both lookups.
        session: Mutable session mapping for this request.
        params: Request parameters searched for a token.
        intent: Whether the request reads or writes.
        config: Session key and token parameter names.
    """

    def __init__(
        self,
        store: AccountStore,
        session: MutableMapping[str, Any],
        *,
        params: Mapping[str, Any] | None = None,
        intent: RequestIntent = RequestIntent.READ,
        config: IdentityConfig | None = None,
    ) -> None:
        self.store = store
        self.session = session
        self.params = params if params is not None else {}
        self.intent = intent
        self.config = config or IdentityConfig()
        # None means unresolved; Resolution(None) means resolved to nobody.
        self._resolution: Resolution | None = None

    @property
    def resolution(self) -> Resolution | None:
        return self._resolution

    def resolve_identity(self) -> Any | None:
        """Return the request's account, or None if nobody is signed in."""
        if self._resolution is not None:
            return self._resolution.identity

        identity = self.identity_from_session()
        if identity is not None:
            logger.debug("Identity resolved from session", extra={"source": "session"})
            return identity

        identity = self.identity_from_token()
        if identity is not None:
            logger.debug(
                "Identity resolved from token",
                extra={"source": "token", "intent": self.intent.value},
            )
            self._resolution = Resolution(identity)
            return identity

        self._resolution = Resolution(None)
        return None

    current_identity = resolve_identity

    def is_signed_in(self) -> bool:
        return self.resolve_identity() is not None

    def identity_from_session(self) -> Any | None:
        identity = lookup_from_session(self.session, self.store, key=self.config.session_key)
        if identity is not None:
            self._resolution = Resolution(identity)
        return identity

    def identity_from_token(self) -> Any | None:
        return lookup_from_token(
            self.params,
            self.intent,
            self.store,
            param=self.config.token_param,
        )

    def set_identity(self, identity: Identity | Literal[False] | None) -> None:
        """Sign an account in, or pass a falsy value to sign out.

        Signing in stores the account's reference in the session and caches
        the account. Signing out drops the session key and resets the cache
        to unresolved, so the next lookup starts from scratch.
        """
        if identity:
            self.session[self.config.session_key] = identity.id
            self._resolution = Resolution(identity)
        else:
            self.session.pop(self.config.session_key, None)
            self._resolution = None
