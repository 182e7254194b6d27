"""Access guard decisions.

The guard does not raise to stop a request. It returns a tagged outcome
and the dispatching middleware decides whether the next stage runs.
"""

from dataclasses import dataclass

from fastapi_request_identity.config import IdentityConfig
from fastapi_request_identity.core.resolver import IdentityResolver


@dataclass(frozen=True)
class Allow:
    """Someone is signed in; handling proceeds."""


@dataclass(frozen=True)
class Deny:
    """Nobody is signed in; the caller is redirected and handling stops.

    Attributes:
        location: Redirect target.
        status_code: Redirect status code.
    """

    location: str
    status_code: int


GuardOutcome = Allow | Deny


def access_denied(config: IdentityConfig | None = None) -> Deny:
    """Build the denial sent to unauthenticated callers."""
    config = config or IdentityConfig()
    return Deny(location=config.redirect_to, status_code=config.redirect_status_code)


def check_access(
    resolver: IdentityResolver,
    config: IdentityConfig | None = None,
) -> GuardOutcome:
    """Allow the request if the resolver finds an identity, deny it otherwise."""
    if resolver.is_signed_in():
        return Allow()
    return access_denied(config or resolver.config)
