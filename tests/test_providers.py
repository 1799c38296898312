import pytest
from eth_account import Account
from web3 import AsyncWeb3

from compound_sdk import (
    DefaultProvider,
    InjectedProvider,
    JsonRpcProvider,
    NodeSigner,
    RpcError,
    Signer,
    SignerRequiredError,
    ValidationError,
    Wallet,
    create_provider,
)
from compound_sdk import providers as providers_module
from compound_sdk.providers import unwrap_signer

from conftest import NODE_ACCOUNT, TEST_MNEMONIC, TEST_PRIVATE_KEY

# First account of the well-known development mnemonic
MNEMONIC_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture()
def no_injected(monkeypatch):
    def fail(*_args, **_kwargs):
        raise AssertionError("injected provider path must not be used")

    monkeypatch.setattr(providers_module, "InjectedProvider", fail)


def test_defaults_to_mainnet(no_injected):
    provider = create_provider()

    assert type(provider) is DefaultProvider
    assert provider.network.chain_id == 1


@pytest.mark.parametrize("selector", ["mainnet", "homestead", "sepolia", "1", 5])
def test_known_network_gives_default_provider(no_injected, selector):
    provider = create_provider({"provider": selector})

    assert type(provider) is DefaultProvider
    assert not hasattr(provider, "send")


def test_network_option_used_when_provider_absent(no_injected):
    provider = create_provider({"network": "sepolia"})

    assert provider.network.name == "sepolia"
    assert provider.url == provider.provider_configs[0].url


def test_provider_option_wins_over_network(no_injected):
    provider = create_provider({"provider": "goerli", "network": "sepolia"})

    assert provider.network.name == "goerli"


def test_url_gives_json_rpc_provider():
    provider = create_provider({"provider": "http://localhost:8545"})

    assert type(provider) is JsonRpcProvider
    assert provider.url == "http://localhost:8545"
    assert provider.network is None


def test_web3_object_gives_node_signer():
    w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://localhost:8545"))

    signer = create_provider({"provider": w3})

    assert isinstance(signer, NodeSigner)
    assert signer.is_signer
    assert isinstance(signer.provider, InjectedProvider)
    assert signer.w3 is w3
    assert signer.provider.url == "http://localhost:8545"


def test_async_web3_provider_object_gives_node_signer():
    signer = create_provider({"provider": AsyncWeb3.AsyncHTTPProvider("http://localhost:8545")})

    assert isinstance(signer, NodeSigner)
    assert isinstance(signer.w3, AsyncWeb3)


def test_unsupported_object_is_rejected():
    with pytest.raises(ValidationError):
        create_provider({"provider": object()})


def test_sdk_provider_is_reused(rpc_provider):
    assert create_provider({"provider": rpc_provider}) is rpc_provider


def test_private_key_wraps_in_wallet():
    provider = create_provider({"network": "sepolia", "privateKey": TEST_PRIVATE_KEY})

    assert isinstance(provider, Wallet)
    assert provider.address == Account.from_key(TEST_PRIVATE_KEY).address
    assert isinstance(provider.provider, DefaultProvider)


def test_mnemonic_wraps_in_wallet():
    provider = create_provider({"network": "sepolia", "mnemonic": TEST_MNEMONIC})

    assert isinstance(provider, Wallet)
    assert provider.address == MNEMONIC_ADDRESS


def test_private_key_takes_precedence_over_mnemonic():
    provider = create_provider(
        {"network": "sepolia", "private_key": TEST_PRIVATE_KEY, "mnemonic": TEST_MNEMONIC}
    )

    assert provider.address == Account.from_key(TEST_PRIVATE_KEY).address
    assert provider.address != MNEMONIC_ADDRESS


def test_private_key_on_web3_object_wraps_underlying_provider():
    w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://localhost:8545"))

    provider = create_provider({"provider": w3, "private_key": TEST_PRIVATE_KEY})

    assert isinstance(provider, Wallet)
    assert isinstance(provider.provider, InjectedProvider)


def test_invalid_private_key_is_not_leaked():
    with pytest.raises(ValidationError) as exc_info:
        create_provider({"private_key": "0xnot-a-key"})

    assert "0xnot-a-key" not in str(exc_info.value)
    assert exc_info.value.__cause__ is None


def test_invalid_mnemonic_is_not_leaked():
    with pytest.raises(ValidationError) as exc_info:
        create_provider({"mnemonic": "definitely not a seed phrase"})

    assert "seed phrase" not in str(exc_info.value)


def test_unknown_option_is_rejected():
    with pytest.raises(ValidationError):
        create_provider({"providr": "mainnet"})


def test_unwrap_signer(wallet, rpc_provider):
    assert unwrap_signer(wallet) is rpc_provider
    assert unwrap_signer(rpc_provider) is rpc_provider


def test_json_rpc_provider_requires_url_or_web3():
    with pytest.raises(ValidationError):
        JsonRpcProvider()


@pytest.mark.asyncio
async def test_send_returns_result(rpc_provider, stub_w3):
    stub_w3.provider.results["eth_blockNumber"] = "0x10"

    assert await rpc_provider.send("eth_blockNumber") == "0x10"
    assert stub_w3.provider.requests == [("eth_blockNumber", [])]


@pytest.mark.asyncio
async def test_send_raises_rpc_error(rpc_provider, stub_w3):
    stub_w3.provider.errors["eth_getBalance"] = {"code": -32602, "message": "invalid argument"}

    with pytest.raises(RpcError) as exc_info:
        await rpc_provider.send("eth_getBalance", ["0x0", "latest"])

    assert exc_info.value.rpc_method == "eth_getBalance"
    assert "invalid argument" in exc_info.value.message


@pytest.mark.asyncio
async def test_node_signer_address_from_node_accounts(node_signer):
    assert await node_signer.get_address() == NODE_ACCOUNT


@pytest.mark.asyncio
async def test_node_signer_without_account_raises(rpc_provider, stub_w3):
    stub_w3.eth.node_accounts = []

    with pytest.raises(SignerRequiredError) as exc_info:
        await NodeSigner(rpc_provider).get_address()

    assert "index 0" in str(exc_info.value)


def test_default_provider_uses_env_rpc_url(monkeypatch):
    monkeypatch.setenv("COMPOUND_RPC_URL_SEPOLIA", "https://sepolia.example.org")

    provider = DefaultProvider("sepolia")

    assert provider.url == "https://sepolia.example.org"
    assert provider.provider_configs[0].url == "https://sepolia.example.org"
    assert len(provider.provider_configs) > 1


def test_signer_base_class_is_abstract(rpc_provider):
    with pytest.raises(TypeError):
        Signer(rpc_provider)
