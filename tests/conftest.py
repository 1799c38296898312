"""
Shared stubs and fixtures. Nothing here touches the network.
"""

from typing import Any, Dict, List, Optional

import pytest
from eth_account import Account
from web3 import Web3

from compound_sdk import JsonRpcProvider, NodeSigner, Wallet

# Private key for tests (DO NOT USE IN PRODUCTION)
TEST_PRIVATE_KEY = "0x" + "11" * 32
TEST_MNEMONIC = "test test test test test test test test test test test junk"

COMP_ADDRESS = "0xc00e94Cb662C3520282E6f5717214004A7f26888"
HOLDER = "0x1234567890123456789012345678901234567890"
NODE_ACCOUNT = Web3.to_checksum_address("0xabcdefabcdefabcdefabcdefabcdefabcdefabcd")
TX_HASH = b"\x12" * 32


async def _value(value):
    return value


class StubFunction:
    def __init__(self, contract: "StubContract", name: str, args: tuple):
        self.contract = contract
        self.fn_name = name
        self.args = args
        self.address = contract.address

    async def call(self, tx_params: Optional[dict] = None):
        self.contract.calls.append(("call", self.fn_name, self.args, tx_params))
        if self.contract.error is not None:
            raise self.contract.error
        return self.contract.result

    async def transact(self, tx_params: dict):
        self.contract.calls.append(("transact", self.fn_name, self.args, tx_params))
        if self.contract.error is not None:
            raise self.contract.error
        return TX_HASH

    async def build_transaction(self, tx_params: dict):
        self.contract.calls.append(("build_transaction", self.fn_name, self.args, tx_params))
        if self.contract.error is not None:
            raise self.contract.error
        return {
            "value": 0,
            "gas": 100_000,
            "gasPrice": 1_000_000_000,
            **tx_params,
            "to": self.address,
            "data": "0x",
        }


class StubFunctions:
    def __init__(self, contract: "StubContract"):
        self._contract = contract

    def __getattr__(self, name: str):
        names = [entry.get("name") for entry in self._contract.abi if entry.get("type") == "function"]
        if name not in names:
            raise AttributeError(f"The function '{name}' was not found in this contract's abi.")
        return lambda *args: StubFunction(self._contract, name, args)


class StubContract:
    def __init__(self, address: str, abi: list, result: Any, error: Optional[BaseException]):
        self.address = address
        self.abi = abi
        self.result = result
        self.error = error
        self.calls: List[tuple] = []
        self.functions = StubFunctions(self)


class StubEth:
    def __init__(self):
        self.contracts: List[StubContract] = []
        self.result: Any = None
        self.error: Optional[BaseException] = None
        self.node_accounts = [NODE_ACCOUNT]
        self.raw_sent: List[bytes] = []

    def contract(self, address: str, abi: list):
        c = StubContract(address, abi, self.result, self.error)
        self.contracts.append(c)
        return c

    @property
    def accounts(self):
        return _value(self.node_accounts)

    @property
    def chain_id(self):
        return _value(1)

    async def get_transaction_count(self, address: str, block: str = "latest") -> int:
        return 7

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        self.raw_sent.append(raw)
        return TX_HASH


class StubRpc:
    def __init__(self):
        self.requests: List[tuple] = []
        self.results: Dict[str, Any] = {}
        self.errors: Dict[str, Any] = {}

    async def make_request(self, method: str, params: list) -> dict:
        self.requests.append((method, params))
        if method in self.errors:
            return {"jsonrpc": "2.0", "id": 1, "error": self.errors[method]}
        return {"jsonrpc": "2.0", "id": 1, "result": self.results.get(method)}


class StubWeb3:
    def __init__(self):
        self.eth = StubEth()
        self.provider = StubRpc()


@pytest.fixture()
def stub_w3() -> StubWeb3:
    return StubWeb3()


@pytest.fixture()
def rpc_provider(stub_w3) -> JsonRpcProvider:
    return JsonRpcProvider("http://stub.invalid", w3=stub_w3)


@pytest.fixture()
def wallet(rpc_provider) -> Wallet:
    return Wallet(TEST_PRIVATE_KEY, rpc_provider)


@pytest.fixture()
def node_signer(rpc_provider) -> NodeSigner:
    return NodeSigner(rpc_provider)


@pytest.fixture()
def wallet_address() -> str:
    return Account.from_key(TEST_PRIVATE_KEY).address
