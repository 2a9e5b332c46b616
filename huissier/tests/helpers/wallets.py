"""
Wallet keypair and signing helpers.
"""

from typing import Tuple

import base58
from nacl.signing import SigningKey


def generate_wallet() -> Tuple[SigningKey, str]:
    """Generate Ed25519 keypair and its base58 Solana address."""
    signing_key = SigningKey.generate()
    address = base58.b58encode(bytes(signing_key.verify_key)).decode("ascii")
    return signing_key, address


def sign_nonce(signing_key: SigningKey, nonce: str) -> str:
    """Sign nonce bytes and return base58 detached signature."""
    signed = signing_key.sign(nonce.encode("utf-8"))
    return base58.b58encode(signed.signature).decode("ascii")
