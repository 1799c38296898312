"""Compound SDK client.

The client resolves a provider once and reuses it for every call, instead of
building a new connection per ``read``/``trx``.

Example:
    >>> from compound_sdk import Compound
    >>> compound = Compound("sepolia", private_key="0x...")
    >>> await compound.get_network()
    NetworkInfo(id=11155111, name='sepolia')
    >>> tx = await compound.trx(token, "function approve(address,uint256) returns (bool)", [spender, amount])
"""

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence, Union

from .errors import SignerRequiredError
from .eth import OptionsLike, get_balance, get_network_info, read, trx
from .models import CallOptions, NetworkInfo
from .providers import BaseProvider, Signer, create_provider


class Compound:
    """Holds one provider (or signer) and forwards calls through it."""

    def __init__(
        self,
        provider: Any = None,
        *,
        network: Optional[str] = None,
        private_key: Optional[str] = None,
        mnemonic: Optional[str] = None,
    ):
        self.provider: Union[BaseProvider, Signer] = create_provider(
            CallOptions(provider=provider, network=network, private_key=private_key, mnemonic=mnemonic)
        )

    @property
    def address(self) -> str:
        """Address of a local-key signer."""
        address = getattr(self.provider, "address", None)
        if address is None:
            raise SignerRequiredError("client has no local signer; use get_address()")
        return address

    async def get_address(self) -> str:
        if not isinstance(self.provider, Signer):
            raise SignerRequiredError("client was created without a signer")
        return await self.provider.get_address()

    async def read(
        self,
        address: str,
        method: str,
        parameters: Optional[Sequence[Any]] = None,
        options: OptionsLike = None,
    ) -> Any:
        """Execute a contract member with ``eth_call`` through the client's provider."""
        return await read(address, method, parameters, self._with_provider(options))

    async def trx(
        self,
        address: str,
        method: str,
        parameters: Optional[Sequence[Any]] = None,
        options: OptionsLike = None,
    ) -> Any:
        """Submit a contract transaction through the client's signer."""
        return await trx(address, method, parameters, self._with_provider(options))

    async def get_balance(self, address: Optional[str] = None) -> str:
        """Raw wei balance (hex string) of ``address``, or of the client's signer."""
        if address is None:
            address = await self.get_address()
        return await get_balance(address, self.provider)

    async def get_network(self) -> NetworkInfo:
        return await get_network_info(self.provider)

    def _with_provider(self, options: Union[CallOptions, Mapping[str, Any], None]) -> CallOptions:
        return replace(CallOptions.coerce(options), compound_provider=self.provider)
