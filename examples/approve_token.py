#!/usr/bin/env python3
"""
Approve an ERC-20 Spender

Demonstrates a state-changing call: the SDK signs locally with the given
private key and submits the transaction, then waits for the receipt.

Environment Variables:
    PRIVATE_KEY: Private key of the sending account (required)
    NETWORK: Network name (default: sepolia)
    TOKEN_ADDRESS: ERC-20 token to approve (required)
    SPENDER_ADDRESS: Spender to approve (required)
    AMOUNT: Amount in base units (default: 1000000)

Run with: python examples/approve_token.py
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

# Load .env file
load_dotenv()

from compound_sdk import ContractCallError, trx

PRIVATE_KEY = os.getenv("PRIVATE_KEY", "")
NETWORK = os.getenv("NETWORK", "sepolia")
TOKEN_ADDRESS = os.getenv("TOKEN_ADDRESS", "")
SPENDER_ADDRESS = os.getenv("SPENDER_ADDRESS", "")
AMOUNT = int(os.getenv("AMOUNT", "1000000"))


async def main() -> int:
    if not (PRIVATE_KEY and TOKEN_ADDRESS and SPENDER_ADDRESS):
        print("PRIVATE_KEY, TOKEN_ADDRESS and SPENDER_ADDRESS must be set")
        return 1

    try:
        tx = await trx(
            TOKEN_ADDRESS,
            "function approve(address spender, uint256 amount) returns (bool)",
            [SPENDER_ADDRESS, AMOUNT],
            {"network": NETWORK, "privateKey": PRIVATE_KEY},
        )
    except ContractCallError as e:
        print(f"approve failed: {e.error}")
        return 1

    print(f"Submitted {tx.hash} (nonce {tx.nonce})")
    receipt = await tx.wait()
    print(f"Mined in block {receipt['blockNumber']}, status {receipt['status']}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
