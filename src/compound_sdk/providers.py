"""Provider and signer construction.

``create_provider`` turns a loose option bag (network name, RPC URL, web3
object, private key, mnemonic) into a provider that contracts can be bound
to, optionally wrapped in a signer that can submit transactions.

Example:
    >>> provider = create_provider({"network": "sepolia", "private_key": "0x..."})
    >>> provider.address
    '0x...'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.providers import AsyncBaseProvider

from .config import NetworkConfig, get_network, get_network_config
from .constants import BLOCK_TAG_PENDING, DEFAULT_HD_PATH, DEFAULT_NETWORK
from .errors import RpcError, SignerRequiredError, ValidationError
from .models import CallOptions, TransactionResponse
from .utils.logging import get_logger

__all__ = [
    "BaseProvider",
    "JsonRpcProvider",
    "InjectedProvider",
    "DefaultProvider",
    "Signer",
    "NodeSigner",
    "Wallet",
    "create_provider",
    "unwrap_signer",
]

_logger = get_logger(__name__)


class BaseProvider:
    """A read-capable connection that contracts can be bound to.

    Attributes:
        w3: AsyncWeb3 instance used for contract binding and calls
        network: Known network this provider is pinned to, if any
        url: Endpoint URL, when the connection has one
    """

    is_signer = False

    def __init__(self, w3: AsyncWeb3, network: Optional[NetworkConfig] = None, url: Optional[str] = None):
        self.w3 = w3
        self.network = network
        self.url = url

    def __repr__(self) -> str:
        network = self.network.name if self.network else None
        return f"{self.__class__.__name__}(url={self.url!r}, network={network!r})"


class JsonRpcProvider(BaseProvider):
    """Direct JSON-RPC connection that also allows raw requests via ``send``."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        w3: Optional[AsyncWeb3] = None,
        network: Optional[NetworkConfig] = None,
    ):
        if w3 is None:
            if not url:
                raise ValidationError("JsonRpcProvider requires a url or a web3 instance")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        super().__init__(w3, network=network, url=url)

    async def send(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Issue a raw JSON-RPC request and return its ``result`` member.

        Raises:
            RpcError: If the response carries an ``error`` member.
        """
        response = await self.w3.provider.make_request(method, list(params or []))
        error = response.get("error")
        if error:
            message = error.get("message") if isinstance(error, Mapping) else str(error)
            raise RpcError(f"{method} failed: {message}", rpc_method=method, rpc_error=error)
        return response.get("result")


class InjectedProvider(JsonRpcProvider):
    """Wraps a caller-owned web3 object (AsyncWeb3 or async web3 provider).

    The connection is typically a local node or wallet that manages its own
    accounts, so ``get_signer`` hands out node-backed signers.
    """

    def __init__(self, injected: Union[AsyncWeb3, AsyncBaseProvider]):
        if isinstance(injected, AsyncWeb3):
            w3 = injected
        elif isinstance(injected, AsyncBaseProvider) or callable(getattr(injected, "make_request", None)):
            w3 = AsyncWeb3(injected)
        else:
            raise ValidationError(
                f"provider object must be an AsyncWeb3 instance or an async web3 provider, "
                f"not {type(injected).__name__}"
            )
        super().__init__(getattr(w3.provider, "endpoint_uri", None), w3=w3)

    def get_signer(self, index: int = 0) -> "NodeSigner":
        return NodeSigner(self, index=index)


class DefaultProvider(BaseProvider):
    """Read-only provider for a known public network.

    It is backed by the network's public endpoints (``provider_configs``) and
    binds contracts through the first of them. It does not expose raw
    ``send``; use one of ``provider_configs`` for raw requests.
    """

    def __init__(self, network: Union[NetworkConfig, str, int], rpc_url: Optional[str] = None):
        cfg = network if isinstance(network, NetworkConfig) else get_network_config(network, rpc_url)
        self.provider_configs = [JsonRpcProvider(url, network=cfg) for url in cfg.rpc_urls]
        first = self.provider_configs[0]
        super().__init__(first.w3, network=cfg, url=first.url)


class Signer(ABC):
    """A provider that can authorize and submit transactions."""

    is_signer = True

    def __init__(self, provider: BaseProvider):
        self.provider = provider

    @property
    def w3(self) -> AsyncWeb3:
        return self.provider.w3

    @abstractmethod
    async def get_address(self) -> str:
        ...

    @abstractmethod
    async def send_transaction(self, fn: Any, tx_params: dict) -> TransactionResponse:
        """Submit a bound contract function call as a transaction."""


class NodeSigner(Signer):
    """Signer backed by an account the node manages (``eth_accounts[index]``)."""

    def __init__(self, provider: BaseProvider, index: int = 0, address: Optional[str] = None):
        super().__init__(provider)
        self.index = index
        self._address = Web3.to_checksum_address(address) if address else None

    async def get_address(self) -> str:
        if self._address is None:
            accounts = await self.w3.eth.accounts
            if len(accounts) <= self.index:
                raise SignerRequiredError(f"node has no account at index {self.index}")
            self._address = Web3.to_checksum_address(accounts[self.index])
        return self._address

    async def send_transaction(self, fn: Any, tx_params: dict) -> TransactionResponse:
        tx = dict(tx_params)
        tx.setdefault("from", await self.get_address())
        tx_hash = await fn.transact(tx)
        return TransactionResponse(
            hash=Web3.to_hex(tx_hash),
            from_address=tx["from"],
            to=fn.address,
            nonce=tx.get("nonce"),
            chain_id=tx.get("chainId"),
            w3=self.w3,
        )


class Wallet(Signer):
    """Signer backed by a local private key; signs locally, sends raw."""

    def __init__(self, private_key: Union[str, bytes, LocalAccount], provider: BaseProvider):
        super().__init__(provider)
        if isinstance(private_key, LocalAccount):
            self.account = private_key
        else:
            # Sanitize key errors to prevent key leakage in stack traces
            try:
                self.account = Account.from_key(private_key)
            except Exception:
                raise ValidationError("Invalid private key format (key not shown for security)") from None

    @classmethod
    def from_mnemonic(cls, mnemonic: str, provider: BaseProvider, path: str = DEFAULT_HD_PATH) -> "Wallet":
        Account.enable_unaudited_hdwallet_features()
        try:
            account = Account.from_mnemonic(mnemonic, account_path=path)
        except Exception:
            raise ValidationError("Invalid mnemonic (phrase not shown for security)") from None
        return cls(account, provider)

    @property
    def address(self) -> str:
        return self.account.address

    async def get_address(self) -> str:
        return self.account.address

    async def send_transaction(self, fn: Any, tx_params: dict) -> TransactionResponse:
        tx = dict(tx_params)
        tx.setdefault("from", self.address)
        if "nonce" not in tx:
            tx["nonce"] = await self.w3.eth.get_transaction_count(self.address, BLOCK_TAG_PENDING)
        if "chainId" not in tx:
            tx["chainId"] = await self.w3.eth.chain_id

        built = await fn.build_transaction(tx)
        signed = self.account.sign_transaction(built)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        return TransactionResponse(
            hash=Web3.to_hex(tx_hash),
            from_address=self.address,
            to=fn.address,
            nonce=tx["nonce"],
            chain_id=tx["chainId"],
            w3=self.w3,
        )

    def __repr__(self) -> str:
        return f"Wallet(address={self.address!r}, provider={self.provider!r})"


def unwrap_signer(provider: Union[BaseProvider, Signer]) -> BaseProvider:
    """Return the provider underneath a signer (or the provider itself)."""
    if getattr(provider, "is_signer", False):
        return provider.provider
    return provider


def create_provider(options: Union[CallOptions, Mapping[str, Any], None] = None) -> Union[BaseProvider, Signer]:
    """Build a provider, optionally signing, from a set of options.

    Resolution order for the connection (``provider`` option, else
    ``network``, else "mainnet"):

    1. a known network name or chain id -> DefaultProvider
    2. a provider or signer built by this SDK -> reused as-is
    3. any other object (AsyncWeb3, async web3 provider) -> node signer
    4. any other string -> JsonRpcProvider for that URL

    A ``private_key`` (or else a ``mnemonic``) wraps the result in a Wallet.

    Args:
        options: CallOptions or a mapping of option keys

    Returns:
        Provider or signer
    """
    options = CallOptions.coerce(options)
    selector = options.provider or options.network or DEFAULT_NETWORK

    network = get_network(str(selector)) if isinstance(selector, (str, int)) else None
    if network is not None:
        provider: Union[BaseProvider, Signer] = DefaultProvider(network.name)
    elif isinstance(selector, (BaseProvider, Signer)):
        provider = selector
    elif not isinstance(selector, str):
        provider = InjectedProvider(selector).get_signer()
    else:
        provider = JsonRpcProvider(selector)

    _logger.debug(
        "Resolved provider",
        extra={"provider_type": type(provider).__name__, "url": getattr(unwrap_signer(provider), "url", None)},
    )

    if options.private_key:
        provider = Wallet(options.private_key, unwrap_signer(provider))
    elif options.mnemonic:
        provider = Wallet.from_mnemonic(options.mnemonic, unwrap_signer(provider))

    return provider
