from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from .constants import DEFAULT_TX_WAIT_TIMEOUT, OVERRIDE_KEYS
from .errors import ValidationError

if TYPE_CHECKING:
    from web3 import AsyncWeb3

__all__ = ["CallMode", "CallOptions", "NetworkInfo", "TransactionResponse"]


class CallMode(str, Enum):
    """Contract invocation path; the value is the JSON-RPC method it maps to."""

    READ = "eth_call"
    WRITE = "eth_sendTransaction"


# camelCase keys accepted by CallOptions.from_dict, mapped to field names
_OPTION_ALIASES = {
    "from": "from_address",
    "gasLimit": "gas_limit",
    "gasPrice": "gas_price",
    "chainId": "chain_id",
    "privateKey": "private_key",
    "_compoundProvider": "compound_provider",
}

# Accepted for compatibility, never forwarded: calldata comes from the ABI.
_IGNORED_OPTIONS = {"data"}


@dataclass
class CallOptions:
    """Options for a contract read or transaction.

    All fields are optional. ``private_key`` wins over ``mnemonic`` when both
    are set. ``compound_provider`` skips provider resolution entirely.
    """

    abi: Any = None
    provider: Any = None
    network: Optional[str] = None
    from_address: Optional[str] = None
    gas: Optional[int] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
    value: Optional[int] = None
    chain_id: Optional[int] = None
    nonce: Optional[int] = None
    private_key: Optional[str] = field(default=None, repr=False)
    mnemonic: Optional[str] = field(default=None, repr=False)
    compound_provider: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CallOptions":
        """Build options from a mapping of snake_case or camelCase keys.

        Raises:
            ValidationError: If the mapping holds an unknown key.
        """
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in _IGNORED_OPTIONS:
                continue
            name = _OPTION_ALIASES.get(key, key)
            if name not in names:
                raise ValidationError(f"unknown option: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Union["CallOptions", Mapping[str, Any], None]) -> "CallOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise ValidationError(f"options must be CallOptions or a mapping, not {type(options).__name__}")

    def overrides(self) -> dict[str, Any]:
        """Transaction overrides appended as the last call parameter.

        Always carries every key in ``OVERRIDE_KEYS``, in order; unset
        options map to None.
        """
        overrides = {key: getattr(self, _OPTION_ALIASES.get(key, key)) for key in OVERRIDE_KEYS}
        if overrides["gasLimit"] is None:
            overrides["gasLimit"] = self.gas
        return overrides


@dataclass(frozen=True)
class NetworkInfo:
    id: int
    name: Optional[str]


@dataclass
class TransactionResponse:
    """A submitted (not yet mined) transaction.

    Attributes:
        hash: 0x-prefixed transaction hash
        from_address: Sender address
        to: Contract address
        nonce: Sender nonce, when known at submission time
        chain_id: Chain id, when known at submission time
    """

    hash: str
    from_address: str
    to: str
    nonce: Optional[int] = None
    chain_id: Optional[int] = None
    w3: Optional["AsyncWeb3"] = field(default=None, repr=False, compare=False)

    async def wait(self, timeout: float = DEFAULT_TX_WAIT_TIMEOUT) -> Any:
        """Wait for the transaction receipt.

        Raises:
            RuntimeError: If no web3 instance is attached or the wait times out.
        """
        if self.w3 is None:
            raise RuntimeError("transaction response is not bound to a provider")
        try:
            return await asyncio.wait_for(
                self.w3.eth.wait_for_transaction_receipt(self.hash),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            raise RuntimeError(
                f"Transaction {self.hash} timed out after {timeout}s. "
                "Check network congestion and gas settings."
            )
