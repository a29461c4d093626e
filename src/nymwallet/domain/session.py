"""WalletSession — the client's snapshot of the signed-in account.

Holds only the latest ClientDetails and Balance.  Both are frozen models
and are swapped as whole objects, so a reader always sees one complete
reply, never a mix of two.  Only successful service results write here.
"""

from __future__ import annotations

from nymwallet.domain.coin import Balance
from nymwallet.domain.results import ClientDetails


class WalletSession:
    """Mutable holder for the current account and balance snapshot."""

    def __init__(self) -> None:
        self._account: ClientDetails | None = None
        self._balance: Balance | None = None

    @property
    def account(self) -> ClientDetails | None:
        return self._account

    @property
    def balance(self) -> Balance | None:
        return self._balance

    @property
    def signed_in(self) -> bool:
        return self._account is not None

    def replace_account(self, account: ClientDetails) -> None:
        self._account = account

    def replace_balance(self, balance: Balance) -> None:
        self._balance = balance

    def clear(self) -> None:
        """Forget the account and balance (log out)."""
        self._account = None
        self._balance = None
