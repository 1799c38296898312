#!/usr/bin/env python3
"""
Read COMP Token Data

Demonstrates read-only contract calls with nothing but a network name.
No private key is needed; calls go through eth_call on a public endpoint.

Environment Variables:
    COMPOUND_RPC_URL_MAINNET: Custom mainnet RPC URL (optional)
    HOLDER_ADDRESS: Account to inspect (default: Compound Timelock)

Run with: python examples/read_comp.py
"""

import asyncio
import os

from dotenv import load_dotenv

# Load .env file
load_dotenv()

from compound_sdk import Compound, ContractCallError

COMP_ADDRESS = "0xc00e94Cb662C3520282E6f5717214004A7f26888"
HOLDER_ADDRESS = os.getenv("HOLDER_ADDRESS", "0x6d903f6003cca6255D85CcA4D3B5E5146dC33925")


async def main() -> None:
    print("=" * 60)
    print("Compound SDK - COMP token reads")
    print("=" * 60)

    compound = Compound("mainnet")
    network = await compound.get_network()
    print(f"Network: {network.name} (chain id {network.id})")

    try:
        supply = await compound.read(COMP_ADDRESS, "function totalSupply() view returns (uint256)")
        balance = await compound.read(
            COMP_ADDRESS,
            "function balanceOf(address owner) view returns (uint256)",
            [HOLDER_ADDRESS],
        )
    except ContractCallError as e:
        print(f"Call to {e.method} failed: {e.error}")
        return

    print(f"COMP total supply: {supply / 1e18:,.2f}")
    print(f"COMP held by {HOLDER_ADDRESS}: {balance / 1e18:,.2f}")

    wei = int(await compound.get_balance(HOLDER_ADDRESS), 16)
    print(f"ETH balance: {wei / 1e18:.4f}")


if __name__ == "__main__":
    asyncio.run(main())
