import pytest

from compound_sdk import CallOptions, Compound, DefaultProvider, NetworkInfo, SignerRequiredError, Wallet
from compound_sdk import eth as eth_module

from conftest import COMP_ADDRESS, HOLDER, TEST_PRIVATE_KEY

TOTAL_SUPPLY = "function totalSupply() view returns (uint256)"
APPROVE = "function approve(address spender, uint256 amount) returns (bool)"


@pytest.fixture()
def client(wallet):
    # Reuse the stubbed wallet as the client's pre-built signer
    return Compound(wallet)


def test_client_resolves_named_network():
    c = Compound("sepolia")

    assert isinstance(c.provider, DefaultProvider)
    assert c.provider.network.name == "sepolia"


def test_client_with_private_key(wallet_address):
    c = Compound(network="sepolia", private_key=TEST_PRIVATE_KEY)

    assert isinstance(c.provider, Wallet)
    assert c.address == wallet_address


def test_read_only_client_has_no_address():
    with pytest.raises(SignerRequiredError):
        Compound("mainnet").address


@pytest.mark.asyncio
async def test_read_only_client_get_address_raises():
    with pytest.raises(SignerRequiredError):
        await Compound("mainnet").get_address()


@pytest.mark.asyncio
async def test_calls_reuse_client_provider(client, stub_w3, monkeypatch):
    def fail(_options):
        raise AssertionError("provider must not be resolved per call")

    monkeypatch.setattr(eth_module, "create_provider", fail)
    stub_w3.eth.result = 9_000_000

    assert await client.read(COMP_ADDRESS, TOTAL_SUPPLY) == 9_000_000
    await client.trx(COMP_ADDRESS, APPROVE, [HOLDER, 1], {"gasLimit": 60_000})

    assert len(stub_w3.eth.contracts) == 2
    build_params = stub_w3.eth.contracts[1].calls[0][3]
    assert build_params["gas"] == 60_000


@pytest.mark.asyncio
async def test_call_options_are_not_mutated(client):
    options = CallOptions(gas_limit=60_000)

    await client.read(COMP_ADDRESS, TOTAL_SUPPLY, [], options)

    assert options.compound_provider is None


@pytest.mark.asyncio
async def test_get_balance_defaults_to_signer(client, stub_w3, wallet_address):
    stub_w3.provider.results["eth_getBalance"] = "0x2a"

    assert await client.get_balance() == "0x2a"
    assert stub_w3.provider.requests == [("eth_getBalance", [wallet_address, "latest"])]


@pytest.mark.asyncio
async def test_get_network(client, stub_w3):
    stub_w3.provider.results["net_version"] = "1"

    assert await client.get_network() == NetworkInfo(id=1, name="mainnet")
