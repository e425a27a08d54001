"""
Token Crypto Service

Invitation secrets: minting, one-way hashing and verification.
"""

import hashlib
import hmac
import secrets
import uuid

TOKEN_BYTES = 32  # 256 bits, 64 hex characters


class TokenCrypto:
    """
    Generates invitation tokens and their SHA-256 digests.

    Only the digest is ever persisted; the token itself lives in the
    invitation URL.
    """

    def generate_token(self) -> str:
        return secrets.token_hex(TOKEN_BYTES)

    def hash_token(self, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Constant-time comparison of hash_token(token) against token_hash"""
        return hmac.compare_digest(
            self.hash_token(token).encode("ascii"),
            token_hash.encode("ascii", errors="replace"),
        )

    def generate_id(self) -> str:
        """Opaque, URL-safe, non-sequential invitation ID"""
        return uuid.uuid4().hex
