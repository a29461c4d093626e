"""Wallet — the handle every service is constructed with.

Owns the transport, the command dispatcher and the session snapshot for
one backend connection.  Built from :class:`WalletSettings`; tests pass
their own transport.

Usage::

    async with Wallet(settings) as wallet:
        result = await AccountService(wallet).user_balance()
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING, Self

from nymwallet.domain.session import WalletSession
from nymwallet.infrastructure.dispatcher import CommandDispatcher
from nymwallet.infrastructure.transport import SubprocessTransport

if TYPE_CHECKING:
    from nymwallet.config.settings import WalletSettings
    from nymwallet.infrastructure.transport import Transport


class Wallet:
    """Backend connection plus the session it serves."""

    def __init__(
        self,
        settings: WalletSettings | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        if settings is None:
            from nymwallet.config.settings import WalletSettings

            settings = WalletSettings()
        self._settings = settings
        if transport is None:
            backend = settings.backend
            transport = SubprocessTransport(
                backend.command,
                cwd=backend.cwd,
                env=backend.env,
                shutdown_grace_s=backend.shutdown_grace_s,
            )
        self._transport = transport
        self._dispatcher = CommandDispatcher(transport)
        self._session = WalletSession()

    @property
    def settings(self) -> WalletSettings:
        return self._settings

    @property
    def dispatcher(self) -> CommandDispatcher:
        """The only route to the backend."""
        return self._dispatcher

    @property
    def session(self) -> WalletSession:
        return self._session

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
