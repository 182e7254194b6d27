"""Exception hierarchy for request identity resolution."""


class RequestIdentityError(Exception):
    """Base exception for all request identity errors.

    This is the parent class for all exceptions raised by the
    fastapi-request-identity package. Catching this exception
    will catch every identity-related error.

    Example:
        try:
            config = IdentityConfig(session_key="")
        except RequestIdentityError as e:
            logger.error(f"Invalid identity setup: {e}")
    """


class AccountNotFoundError(RequestIdentityError, LookupError):
    """Raised by an account store when a reference has no matching account.

    Stores raise this from ``find_by_reference`` when the stored reference
    is stale (the account was deleted, or the session outlived it). The
    session lookup recovers from it and treats the request as having no
    identity; it never reaches route handlers.

    Example:
        AccountNotFoundError("No account with reference 42")
    """

    def __init__(self, reference: object) -> None:
        self.reference = reference
        super().__init__(f"No account with reference {reference!r}")


class IdentityConfigurationError(RequestIdentityError):
    """Raised when identity resolution is misconfigured.

    This exception is raised when:
        - IdentityConfig receives an empty session key or token parameter
        - The redirect status code is not a 3xx code
        - A request is resolved before install_identity() was called on the app

    Example:
        IdentityConfigurationError(
            "redirect_status_code must be a 3xx redirect status, got 200"
        )
    """


class MiddlewareValidationError(RequestIdentityError):
    """Raised when a middleware chain is assembled from invalid values.

    This exception is raised when:
        - A middleware value is neither a callable nor a list/tuple of callables
        - A list of middleware contains a non-callable entry

    Example:
        MiddlewareValidationError(
            "guarded_route_class: middleware must be a list or callable, got str"
        )
    """
