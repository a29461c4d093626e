"""ContractService — mixnet contract settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from nymwallet.domain.commands import GET_CONTRACT_SETTINGS, UPDATE_CONTRACT_SETTINGS
from nymwallet.domain.errors import InvalidOperationData
from nymwallet.domain.results import ContractSettings
from nymwallet.services.base import BaseService
from nymwallet.services.result import ServiceResult
from nymwallet.services.telemetry import traced


class ContractService(BaseService):
    @traced
    async def get_contract_params(self) -> ServiceResult[ContractSettings]:
        return await self._invoke(
            "get_contract_params", GET_CONTRACT_SETTINGS, reply=ContractSettings
        )

    @traced
    async def set_contract_params(
        self, params: ContractSettings | Mapping[str, Any]
    ) -> ServiceResult[ContractSettings]:
        """Write contract settings.

        The backend may normalise what it accepts; the returned settings
        are authoritative over *params*.
        """
        op = "set_contract_params"
        if not isinstance(params, ContractSettings):
            try:
                params = ContractSettings.model_validate(dict(params))
            except ValidationError as exc:
                return self._failure(
                    op,
                    InvalidOperationData(f"Invalid contract settings: {exc.error_count()} error(s)"),
                )

        return await self._invoke(
            op,
            UPDATE_CONTRACT_SETTINGS,
            {"params": params.model_dump(mode="json", exclude_none=True)},
            reply=ContractSettings,
        )
