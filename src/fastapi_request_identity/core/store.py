"""Account store contract and an in-memory reference implementation.

The resolver never persists accounts itself. It talks to a store through
three lookups: by primary reference (for sessions) and by token (for API
callers). Applications adapt their own persistence layer to AccountStore.
"""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from fastapi_request_identity.exceptions import AccountNotFoundError


@runtime_checkable
class Identity(Protocol):
    """Anything with a primary reference can be a signed-in identity."""

    @property
    def id(self) -> Any: ...


@runtime_checkable
class AccountStore(Protocol):
    """Lookups the resolver needs from the persistence layer."""

    def find_by_reference(self, reference: Any) -> Any:
        """Return the account for a primary reference.

        Raises:
            AccountNotFoundError: If no account has this reference.
        """
        ...

    def find_by_public_or_private_token(self, token: str) -> Any | None:
        """Return the account owning a public or private token, else None."""
        ...

    def find_by_private_token(self, token: str) -> Any | None:
        """Return the account owning a private token, else None.

        Tokens that are only valid as public tokens must not match.
        """
        ...


@dataclass(frozen=True)
class Account:
    """A minimal account record.

    Attributes:
        id: Primary reference stored in the session.
        name: Display name.
        public_token: Read-only token, safe to embed in shareable links.
        private_token: Token required for state-changing requests.
    """

    id: Hashable
    name: str = ""
    public_token: str | None = None
    private_token: str | None = None


class InMemoryAccountStore:
    """Dict-backed AccountStore.

    Example:
        store = InMemoryAccountStore([
            Account(id=1, name="ada", public_token="pub-1", private_token="priv-1"),
        ])
        store.find_by_private_token("pub-1")  # None
    """

    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self._accounts: dict[Hashable, Account] = {}
        for account in accounts:
            self.add(account)

    def add(self, account: Account) -> Account:
        self._accounts[account.id] = account
        return account

    def remove(self, reference: Hashable) -> None:
        self._accounts.pop(reference, None)

    def find_by_reference(self, reference: Any) -> Account:
        try:
            return self._accounts[reference]
        except (KeyError, TypeError) as exc:
            raise AccountNotFoundError(reference) from exc

    def find_by_public_or_private_token(self, token: str) -> Account | None:
        for account in self._accounts.values():
            if token in (account.public_token, account.private_token):
                return account
        return None

    def find_by_private_token(self, token: str) -> Account | None:
        for account in self._accounts.values():
            if account.private_token is not None and account.private_token == token:
                return account
        return None
