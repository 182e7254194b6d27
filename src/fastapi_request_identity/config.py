"""Configuration for identity resolution and the access guard."""

from dataclasses import dataclass

from fastapi_request_identity.exceptions import IdentityConfigurationError

DEFAULT_SESSION_KEY = "user"
DEFAULT_TOKEN_PARAM = "token"
DEFAULT_REDIRECT_TO = "/"
DEFAULT_REDIRECT_STATUS_CODE = 302


@dataclass(frozen=True)
class IdentityConfig:
    """Settings shared by the resolver, the lookups and the guard.

    Attributes:
        session_key: Session key holding the signed-in account's reference.
        token_param: Request parameter carrying an API token.
        redirect_to: Location unauthenticated callers are sent to.
        redirect_status_code: Status code of the denial redirect.

    Raises:
        IdentityConfigurationError: If any value is empty or the status code
            is not a redirect.
    """

    session_key: str = DEFAULT_SESSION_KEY
    token_param: str = DEFAULT_TOKEN_PARAM
    redirect_to: str = DEFAULT_REDIRECT_TO
    redirect_status_code: int = DEFAULT_REDIRECT_STATUS_CODE

    def __post_init__(self) -> None:
        for name in ("session_key", "token_param", "redirect_to"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise IdentityConfigurationError(
                    f"{name} must be a non-empty string, got {value!r}"
                )
        if not 300 <= self.redirect_status_code < 400:
            raise IdentityConfigurationError(
                "redirect_status_code must be a 3xx redirect status, "
                f"got {self.redirect_status_code}"
            )
