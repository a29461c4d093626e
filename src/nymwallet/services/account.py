"""AccountService — account creation, sign-in, balance, log-out."""

from __future__ import annotations

from nymwallet.domain.coin import Balance
from nymwallet.domain.commands import CONNECT_WITH_MNEMONIC, CREATE_ACCOUNT
from nymwallet.domain.errors import InvalidCredential
from nymwallet.domain.results import ClientDetails, CreatedAccount
from nymwallet.services.base import BaseService
from nymwallet.services.result import ErrorCode, ServiceResult
from nymwallet.services.telemetry import traced

MNEMONIC_WORD_COUNTS = (12, 15, 18, 21, 24)


def normalize_mnemonic(mnemonic: str) -> str:
    """Collapse whitespace and check the BIP-39 word count.

    Raises:
        InvalidCredential: blank phrase or unsupported word count.
    """
    words = mnemonic.split()
    if not words:
        raise InvalidCredential("Mnemonic is empty")
    if len(words) not in MNEMONIC_WORD_COUNTS:
        allowed = ", ".join(str(n) for n in MNEMONIC_WORD_COUNTS)
        raise InvalidCredential(f"Mnemonic has {len(words)} words; expected one of {allowed}")
    return " ".join(words)


class AccountService(BaseService):
    """Account lifecycle and the session's balance snapshot."""

    @traced
    async def create_account(self) -> ServiceResult[CreatedAccount]:
        """Ask the backend for a fresh account.

        The reply carries the new mnemonic; it is not stored in the
        session, the caller is expected to show it once and sign in.
        """
        return await self._invoke(
            "create_account",
            CREATE_ACCOUNT,
            reply=CreatedAccount,
            rejected_code=ErrorCode.INVALID_CREDENTIAL,
        )

    @traced
    async def sign_in_with_mnemonic(self, mnemonic: str) -> ServiceResult[ClientDetails]:
        """Connect with a recovery phrase and record the account in the session."""
        op = "sign_in"
        try:
            phrase = normalize_mnemonic(mnemonic)
        except InvalidCredential as exc:
            return self._failure(op, exc)

        result = await self._invoke(
            op,
            CONNECT_WITH_MNEMONIC,
            {"mnemonic": phrase},
            reply=ClientDetails,
            rejected_code=ErrorCode.INVALID_CREDENTIAL,
        )
        if result.ok:
            self._session.replace_account(result.data)
        return result

    @traced
    async def user_balance(self) -> ServiceResult[Balance]:
        """Fetch the balance; the session snapshot is replaced only on success."""
        return await self._fetch_balance("user_balance")

    @traced
    def log_out(self) -> ServiceResult[None]:
        """Drop the local session snapshot.  No backend call is made."""
        self._session.clear()
        return ServiceResult(ok=True, op="log_out")
