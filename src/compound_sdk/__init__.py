"""
Compound SDK - Python SDK for Ethereum and the Compound Protocol.

Generic contract reads and transactions on top of web3.py, plus provider
construction from network names, RPC URLs, web3 objects, private keys or
mnemonics.

Example:
    >>> import asyncio
    >>> from compound_sdk import read
    >>>
    >>> async def main():
    ...     return await read(
    ...         "0xc00e94Cb662C3520282E6f5717214004A7f26888",
    ...         "function totalSupply() view returns (uint256)",
    ...     )
    >>>
    >>> asyncio.run(main())
"""

from .abi import method_name, normalize_abi, parse_signature
from .client import Compound
from .config import NETWORKS, NetworkConfig, get_network, get_network_config
from .constants import DEFAULT_NETWORK, OVERRIDE_KEYS
from .errors import (
    AbiError,
    CompoundError,
    ContractCallError,
    RpcError,
    SignerRequiredError,
    ValidationError,
)
from .eth import dispatch, get_balance, get_network_info, read, trx
from .models import CallMode, CallOptions, NetworkInfo, TransactionResponse
from .providers import (
    BaseProvider,
    DefaultProvider,
    InjectedProvider,
    JsonRpcProvider,
    NodeSigner,
    Signer,
    Wallet,
    create_provider,
)

__version__ = "0.3.0"

__all__ = [
    # Client
    "Compound",
    # Calls
    "read",
    "trx",
    "dispatch",
    "get_balance",
    "get_network_info",
    # Providers
    "create_provider",
    "BaseProvider",
    "JsonRpcProvider",
    "InjectedProvider",
    "DefaultProvider",
    "Signer",
    "NodeSigner",
    "Wallet",
    # Models
    "CallMode",
    "CallOptions",
    "NetworkInfo",
    "TransactionResponse",
    # Config
    "NetworkConfig",
    "NETWORKS",
    "get_network",
    "get_network_config",
    "DEFAULT_NETWORK",
    "OVERRIDE_KEYS",
    # ABI
    "normalize_abi",
    "parse_signature",
    "method_name",
    # Errors
    "CompoundError",
    "ValidationError",
    "AbiError",
    "RpcError",
    "SignerRequiredError",
    "ContractCallError",
]
