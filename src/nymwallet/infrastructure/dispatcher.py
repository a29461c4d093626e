"""CommandDispatcher — the single path from the client to the backend.

Every wallet operation reaches the backend through :meth:`invoke`.  The
dispatcher encodes the parameter record, hands it to the transport and
decodes the reply into the type the caller expects.  It never retries,
never queues and never swallows a failure.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar, overload

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from nymwallet.infrastructure.errors import BackendUnavailable, DispatchError, MalformedResponse

if TYPE_CHECKING:
    from nymwallet.infrastructure.transport import Transport

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@functools.cache
def _adapter(reply: Any) -> TypeAdapter[Any]:
    return TypeAdapter(reply)


def encode_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Turn a parameter record into JSON-ready values.

    Pydantic models are dumped in JSON mode, enums become their values
    and ``Decimal`` becomes a string, so amounts never pass through float.
    """
    if not params:
        return {}
    try:
        return {str(key): to_jsonable_python(value) for key, value in params.items()}
    except PydanticSerializationError as exc:
        raise TypeError(f"Parameters are not serialisable: {exc}") from exc


class CommandDispatcher:
    """Issue backend commands and decode their replies."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    @overload
    async def invoke(
        self, command: str, params: Mapping[str, Any] | None = ..., *, reply: type[_T]
    ) -> _T: ...

    @overload
    async def invoke(
        self, command: str, params: Mapping[str, Any] | None = ..., *, reply: Any = ...
    ) -> Any: ...

    async def invoke(
        self,
        command: str,
        params: Mapping[str, Any] | None = None,
        *,
        reply: Any = Any,
    ) -> Any:
        """Send *command* with *params* and return the reply as *reply*.

        Args:
            command: Backend command name.
            params: Parameter record; omitted means an empty record.
            reply: Expected result type, anything pydantic can validate.

        Raises:
            BackendUnavailable: transport or process failure.
            InvocationRejected: backend refusal, reason kept verbatim.
            MalformedResponse: the reply does not fit *reply*.
        """
        payload = encode_params(params)
        try:
            raw = await self._transport.request(command, payload)
        except DispatchError as exc:
            exc.command = exc.command or command
            logger.info("Invocation of %s failed: %s", command, exc.code)
            raise
        except (ConnectionError, EOFError, OSError) as exc:
            logger.info("Invocation of %s failed: %s", command, BackendUnavailable.code)
            raise BackendUnavailable(f"Backend unreachable: {exc}", command=command) from exc

        try:
            value = _adapter(reply).validate_python(raw)
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            logger.error("Malformed reply to %s (%d validation errors)", command, len(errors))
            raise MalformedResponse(
                f"Unexpected reply to {command}",
                command=command,
                detail={"errors": to_jsonable_python(errors, fallback=str)},
            ) from exc

        logger.debug("Invocation of %s succeeded", command)
        return value
