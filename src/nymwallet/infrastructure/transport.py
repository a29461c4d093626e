"""Transports carrying command envelopes to the backend process.

The wire format of :class:`SubprocessTransport` is newline-delimited
JSON over the child's stdin/stdout::

    -> {"id": 7, "cmd": "get_balance", "args": {}}
    <- {"id": 7, "ok": true, "result": {...}}
    <- {"id": 8, "ok": false, "error": "insufficient funds"}

Replies are matched to requests by ``id`` so any number of calls can be
in flight and the backend may answer them in any order.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from nymwallet.infrastructure.errors import (
    BackendUnavailable,
    DispatchError,
    InvocationRejected,
    MalformedResponse,
)

logger = logging.getLogger(__name__)

# Large pages of delegations can exceed asyncio's 64 KiB default line limit.
_READ_LIMIT = 16 * 1024 * 1024


class Transport(Protocol):
    """Anything that can deliver one command to the backend and await its reply."""

    async def request(self, command: str, params: dict[str, Any]) -> Any:
        """Send *command* and return the raw decoded result.

        Raises:
            BackendUnavailable: the backend cannot be reached.
            InvocationRejected: the backend refused the command.
            MalformedResponse: the reply envelope is unusable.
        """
        ...

    async def close(self) -> None: ...


@dataclass
class _Pending:
    command: str
    future: asyncio.Future[Any]


class SubprocessTransport:
    """Talk to a backend child process over JSON lines.

    The process is started on the first request.  Once it exits, every
    call still waiting fails with :class:`BackendUnavailable` and so does
    every later call; nothing is restarted or retried here.
    """

    def __init__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        shutdown_grace_s: float = 5.0,
    ) -> None:
        self._argv = list(argv)
        self._cwd = cwd
        self._env = dict(env) if env else None
        self._shutdown_grace_s = shutdown_grace_s
        self._process: asyncio.subprocess.Process | None = None
        self._reader: asyncio.Task[None] | None = None
        self._pending: dict[int, _Pending] = {}
        self._ids = itertools.count(1)
        self._start_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._exit_reason: str | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(self, command: str, params: dict[str, Any]) -> Any:
        process = await self._ensure_started()
        assert process.stdin is not None

        request_id = next(self._ids)
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[request_id] = _Pending(command=command, future=future)

        line = json.dumps({"id": request_id, "cmd": command, "args": params}, separators=(",", ":"))
        try:
            # The lock keeps lines from interleaving on the pipe; calls are
            # not serialised beyond the write itself.
            async with self._write_lock:
                process.stdin.write(line.encode("utf-8") + b"\n")
                await process.stdin.drain()
        except (ConnectionError, OSError) as exc:
            self._pending.pop(request_id, None)
            raise BackendUnavailable(f"Backend pipe closed: {exc}", command=command) from exc

        try:
            return await future
        finally:
            self._pending.pop(request_id, None)

    async def close(self) -> None:
        """Close stdin, wait for the child to exit, and fail anything pending."""
        process = self._process
        if process is None:
            return
        if process.returncode is None:
            if process.stdin is not None and not process.stdin.is_closing():
                process.stdin.close()
            try:
                await asyncio.wait_for(process.wait(), timeout=self._shutdown_grace_s)
            except TimeoutError:
                logger.warning("Backend did not exit within %.1fs; killing it", self._shutdown_grace_s)
                process.kill()
                await process.wait()
        if self._reader is not None:
            await self._reader

    # ------------------------------------------------------------------
    # Process lifecycle
    # ------------------------------------------------------------------

    async def _ensure_started(self) -> asyncio.subprocess.Process:
        async with self._start_lock:
            if self._process is not None:
                if self._process.returncode is not None:
                    raise BackendUnavailable(self._exit_reason or "Backend has exited")
                return self._process

            if not self._argv:
                raise BackendUnavailable("No backend command configured")

            env = {**os.environ, **self._env} if self._env else None
            try:
                process = await asyncio.create_subprocess_exec(
                    *self._argv,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    cwd=self._cwd,
                    env=env,
                    limit=_READ_LIMIT,
                )
            except OSError as exc:
                raise BackendUnavailable(f"Cannot start backend {self._argv[0]!r}: {exc}") from exc

            logger.debug("Started backend pid=%s: %s", process.pid, " ".join(self._argv))
            self._process = process
            self._reader = asyncio.create_task(self._read_replies(process))
            return process

    async def _read_replies(self, process: asyncio.subprocess.Process) -> None:
        assert process.stdout is not None
        try:
            while True:
                raw = await process.stdout.readline()
                if not raw:
                    break
                self._deliver(raw)
        except ValueError:
            logger.error("Backend reply exceeded %d bytes; stopping backend", _READ_LIMIT)
            if process.returncode is None:
                process.kill()
        finally:
            returncode = await process.wait()
            self._exit_reason = f"Backend exited with code {returncode}"
            logger.debug(self._exit_reason)
            self._fail_pending(self._exit_reason)

    def _fail_pending(self, reason: str) -> None:
        for request_id, pending in list(self._pending.items()):
            if not pending.future.done():
                pending.future.set_exception(BackendUnavailable(reason, command=pending.command))
            self._pending.pop(request_id, None)

    # ------------------------------------------------------------------
    # Reply decoding
    # ------------------------------------------------------------------

    def _deliver(self, raw: bytes) -> None:
        try:
            reply = json.loads(raw)
        except ValueError:
            logger.warning("Dropping undecodable backend line: %r", raw[:200])
            return

        request_id = reply.get("id") if isinstance(reply, dict) else None
        if not isinstance(request_id, int) or isinstance(request_id, bool):
            logger.warning("Dropping backend line without a request id: %r", raw[:200])
            return

        pending = self._pending.get(request_id)
        if pending is None or pending.future.done():
            logger.warning("Dropping reply for unknown request id %s", request_id)
            return

        if reply.get("ok") is True and "result" in reply:
            pending.future.set_result(reply["result"])
        else:
            pending.future.set_exception(_decode_error(reply, pending.command))


def _decode_error(reply: dict[str, Any], command: str) -> DispatchError:
    """Build the exception for a reply that is not a successful result."""
    if reply.get("ok") is False:
        error = reply.get("error")
        if error is None:
            return InvocationRejected("Rejected without a reason", command=command)
        reason = error if isinstance(error, str) else json.dumps(error)
        return InvocationRejected(reason, command=command)
    return MalformedResponse(
        "Reply envelope is missing 'ok' or 'result'",
        command=command,
        detail={"keys": sorted(reply)},
    )
