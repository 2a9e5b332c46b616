"""
Solana wallet authentication adapter.

Implements wallet signature verification using Ed25519.
"""

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from huissier.domain.services.i_wallet_authenticator import IWalletAuthenticator

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class SolanaWalletAdapter(IWalletAuthenticator):
    """
    Solana wallet authentication using Ed25519 signatures.

    Verifies wallet ownership via detached signature verification over
    the raw UTF-8 bytes of the nonce. Fails closed: malformed input is
    reported exactly like a wrong signature.
    """

    async def verify_signature(
        self,
        wallet_address: str,
        message: str,
        signature: str,
    ) -> bool:
        """
        Verify Solana wallet signature.

        Args:
            wallet_address: Solana wallet address (base58)
            message: Original message that was signed
            signature: Signature (base58 encoded)

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            # Decode wallet public key from base58
            public_key_bytes = base58.b58decode(wallet_address)
            if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
                return False
            verify_key = VerifyKey(public_key_bytes)

            # Decode signature from base58
            signature_bytes = base58.b58decode(signature)
            if len(signature_bytes) != SIGNATURE_LENGTH:
                return False

            # Nonce bytes exactly as signed, no framing
            message_bytes = message.encode("utf-8")

            verify_key.verify(message_bytes, signature_bytes)

            return True

        except (BadSignatureError, ValueError, TypeError):
            return False
