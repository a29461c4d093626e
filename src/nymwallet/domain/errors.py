"""Client-side validation failures, raised before any backend round trip."""

from __future__ import annotations


class WalletValidationError(ValueError):
    """Input rejected by the client before reaching the backend."""

    code = "VALIDATION_ERROR"


class InvalidOperationData(WalletValidationError):
    """Operation payload does not match the variant it was sent with."""

    code = "INVALID_OPERATION_DATA"


class InvalidCredential(WalletValidationError):
    """Mnemonic or account credential is unusable."""

    code = "INVALID_CREDENTIAL"


class ConversionError(WalletValidationError):
    """Amount is not a non-negative decimal acceptable for conversion."""

    code = "CONVERSION_ERROR"
