"""
Exceptions raised by the Compound SDK.

Every SDK error inherits from CompoundError, which carries a machine-readable
code and a details dictionary next to the human-readable message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "CompoundError",
    "ValidationError",
    "AbiError",
    "RpcError",
    "SignerRequiredError",
    "ContractCallError",
]


class CompoundError(Exception):
    """
    Base exception for all Compound SDK errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "RPC_ERROR").
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "COMPOUND_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(CompoundError):
    """Raised when input validation fails."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AbiError(ValidationError):
    """Raised when a method signature or ABI cannot be parsed."""


class RpcError(CompoundError):
    """Raised when a raw JSON-RPC request returns an error member."""

    def __init__(
        self,
        message: str,
        *,
        rpc_method: Optional[str] = None,
        rpc_error: Optional[Any] = None,
    ) -> None:
        super().__init__(
            message,
            code="RPC_ERROR",
            details={"rpc_method": rpc_method, "rpc_error": rpc_error},
        )
        self.rpc_method = rpc_method
        self.rpc_error = rpc_error


class SignerRequiredError(CompoundError):
    """Raised when a transaction is submitted through a read-only provider."""

    def __init__(self, message: str = "sending a transaction requires a signer") -> None:
        super().__init__(message, code="SIGNER_REQUIRED")


class ContractCallError(CompoundError):
    """
    Raised when a bound contract call (eth_call or eth_sendTransaction) fails.

    The underlying exception is kept as ``error`` (and as ``__cause__``).
    ``parameters`` is the full positional list that was dispatched, including
    the trailing overrides mapping, with any private key removed.

    Attributes:
        error: The exception raised by web3.py or the signer.
        method: Resolved contract method name.
        parameters: Dispatched parameters (private key scrubbed).
    """

    def __init__(
        self,
        message: str,
        *,
        error: BaseException,
        method: str,
        parameters: List[Any],
    ) -> None:
        super().__init__(
            message,
            code="CONTRACT_CALL_ERROR",
            details={"method": method, "error": str(error)},
        )
        self.error = error
        self.method = method
        self.parameters = parameters

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["method"] = self.method
        data["parameters"] = self.parameters
        return data
