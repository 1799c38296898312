"""Generic Ethereum calls: contract reads and transactions, balance and network lookups.

``read`` runs a contract member through ``eth_call`` (no state change, no
gas); ``trx`` submits it as a transaction through a signer. Both accept the
method either as a full signature (no ABI needed) or as a bare name together
with an explicit ``abi`` option.

Example:
    >>> supply = await read(
    ...     "0xc00e94Cb662C3520282E6f5717214004A7f26888",
    ...     "function totalSupply() view returns (uint256)",
    ... )
    >>> tx = await trx(
    ...     comp_address,
    ...     "function transfer(address,uint256) returns (bool)",
    ...     [recipient, amount],
    ...     {"network": "sepolia", "private_key": "0x..."},
    ... )
    >>> receipt = await tx.wait()
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from web3 import Web3

from .abi import method_name, normalize_abi
from .config import get_network
from .constants import BLOCK_TAG_LATEST, CANONICAL_MAINNET_NAME, DEFAULT_NETWORK, TX_PARAM_RENAMES
from .errors import ContractCallError, SignerRequiredError, ValidationError
from .models import CallMode, CallOptions, NetworkInfo
from .providers import BaseProvider, JsonRpcProvider, Signer, create_provider, unwrap_signer
from .utils.logging import get_logger

__all__ = ["dispatch", "read", "trx", "get_balance", "get_network_info"]

_logger = get_logger(__name__)

OptionsLike = Union[CallOptions, Mapping[str, Any], None]


async def dispatch(
    mode: CallMode,
    address: str,
    method: str,
    parameters: Optional[Sequence[Any]] = None,
    options: OptionsLike = None,
) -> Any:
    """Invoke a contract member through ``eth_call`` or a transaction.

    The transaction overrides mapping is appended to a copy of
    ``parameters``; the caller's sequence is left untouched.

    Args:
        mode: CallMode.READ or CallMode.WRITE
        address: Contract address
        method: Full signature when no ``abi`` option is given, else the member name
        parameters: Positional arguments of the member
        options: CallOptions or a mapping of option keys

    Returns:
        Decoded return value (READ) or a TransactionResponse (WRITE)

    Raises:
        ContractCallError: If the contract invocation fails
        ValidationError: If the address or options are invalid
        AbiError: If the ABI or signature cannot be parsed
    """
    options = CallOptions.coerce(options)
    provider = options.compound_provider or create_provider(options)

    params: List[Any] = list(parameters or [])
    params.append(options.overrides())

    if options.abi:
        abi = normalize_abi(options.abi)
    else:
        abi = normalize_abi([method])
        method = method_name(method)

    contract = _bind_contract(provider, address, abi)

    _logger.debug(
        "Dispatching contract call",
        extra={"rpc": mode.value, "address": contract.address, "method": method},
    )

    try:
        fn = getattr(contract.functions, method)(*params[:-1])
        tx_params = _to_tx_params(params[-1])
        if mode is CallMode.WRITE:
            if not isinstance(provider, Signer):
                raise SignerRequiredError()
            return await provider.send_transaction(fn, tx_params)
        if isinstance(provider, Signer) and "from" not in tx_params:
            tx_params["from"] = await provider.get_address()
        return await fn.call(tx_params)
    except Exception as error:
        _scrub_private_key(params)
        _logger.warning(
            "Contract call failed",
            extra={"rpc": mode.value, "address": address, "method": method, "error": str(error)},
        )
        raise ContractCallError(
            f"Error occurred during [{mode.value}]. See {{error}}.",
            error=error,
            method=method,
            parameters=params,
        ) from error


async def read(
    address: str,
    method: str,
    parameters: Optional[Sequence[Any]] = None,
    options: OptionsLike = None,
) -> Any:
    """Execute a contract member with ``eth_call``.

    Runs constant or non-constant members without creating a transaction,
    to read a value or to test a transaction's parameters.

    Args:
        address: Contract address
        method: Member signature, or member name when ``abi`` is given
        parameters: Member arguments
        options: ABI, provider selection and transaction overrides

    Returns:
        Decoded return value of the member
    """
    return await dispatch(CallMode.READ, address, method, parameters, options)


async def trx(
    address: str,
    method: str,
    parameters: Optional[Sequence[Any]] = None,
    options: OptionsLike = None,
) -> Any:
    """Submit a transaction invoking a contract member.

    Requires a signer: a ``private_key``/``mnemonic`` option, a web3 object
    with node-managed accounts, or a signer passed as ``provider``.

    Returns:
        TransactionResponse for the submitted transaction
    """
    return await dispatch(CallMode.WRITE, address, method, parameters, options)


async def get_network_info(provider: Union[BaseProvider, Signer]) -> NetworkInfo:
    """Return the chain id and network name a provider is connected to.

    Providers with raw ``send`` are asked for ``net_version``; others report
    the network they were created for. Chain id 1 is named "mainnet".
    """
    provider = unwrap_signer(provider)

    send = getattr(provider, "send", None)
    if callable(send):
        network_id = await send("net_version")
    else:
        network = getattr(provider, "network", None)
        network_id = network.chain_id if network else None

    network_id = _to_int(network_id)
    network = get_network(network_id)
    name = network.name if network else None

    return NetworkInfo(id=network_id, name=DEFAULT_NETWORK if name == CANONICAL_MAINNET_NAME else name)


async def get_balance(address: str, provider: Union[BaseProvider, Signer, Mapping[str, Any], str, None] = None) -> str:
    """Return the raw ``eth_getBalance`` result (hex wei string) at the latest block.

    Args:
        address: Account address
        provider: Provider, signer, network name/URL, or an options mapping
    """
    if isinstance(provider, Mapping):
        provider = create_provider(provider)
    elif not isinstance(provider, (BaseProvider, Signer)):
        provider = create_provider({"provider": provider})
    provider = unwrap_signer(provider)

    if not callable(getattr(provider, "send", None)):
        provider = JsonRpcProvider(provider.provider_configs[0].url)

    return await provider.send("eth_getBalance", [address, BLOCK_TAG_LATEST])


def _bind_contract(provider: Union[BaseProvider, Signer], address: str, abi: list) -> Any:
    if not Web3.is_address(address):
        raise ValidationError("address must be a valid Ethereum address")
    return provider.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)


def _to_tx_params(overrides: Mapping[str, Any]) -> dict:
    return {TX_PARAM_RENAMES.get(k, k): v for k, v in overrides.items() if v is not None}


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _scrub_private_key(params: List[Any]) -> None:
    try:
        last = params[-1]
        for key in ("private_key", "privateKey"):
            last.pop(key, None)
    except Exception:
        # Best effort: the last parameter may not be a mapping.
        pass
