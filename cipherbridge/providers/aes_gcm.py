"""
AES-GCM provider backed by the cryptography package.

Generates a random 96-bit IV per call and carries the 16-byte GCM tag
separately from the ciphertext. IV, tag and ciphertext are exchanged as
base64 text.
"""

import base64
import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .base import CipherProvider, SealedData

IV_LENGTH = 12
TAG_LENGTH = 16


class AesGcmCipherProvider(CipherProvider):
    """CipherProvider using cryptography's AESGCM."""

    async def encrypt(self, plain_text: str, is_binary: bool, base64_key: str) -> SealedData:
        key = base64.b64decode(base64_key, validate=True)
        if len(key) != 32:
            raise ValueError(f"AES-256-GCM requires a 32-byte key, got {len(key)} bytes")

        plaintext = base64.b64decode(plain_text, validate=True) if is_binary else plain_text.encode("utf-8")

        iv = os.urandom(IV_LENGTH)
        ciphertext_with_tag = AESGCM(key).encrypt(iv, plaintext, None)

        # AESGCM appends the tag to the ciphertext
        return SealedData(
            iv=_b64(iv),
            tag=_b64(ciphertext_with_tag[-TAG_LENGTH:]),
            content=_b64(ciphertext_with_tag[:-TAG_LENGTH]),
        )

    async def decrypt(self, base64_ciphertext: str, base64_key: str,
                      iv: str, tag: str, is_binary: bool) -> str:
        key = base64.b64decode(base64_key, validate=True)
        if len(key) != 32:
            raise ValueError(f"AES-256-GCM requires a 32-byte key, got {len(key)} bytes")

        nonce = base64.b64decode(iv, validate=True)
        auth_tag = base64.b64decode(tag, validate=True)
        if len(nonce) != IV_LENGTH:
            raise ValueError(f"AES-GCM requires a {IV_LENGTH}-byte IV")
        if len(auth_tag) != TAG_LENGTH:
            raise ValueError(f"AES-GCM requires a {TAG_LENGTH}-byte tag")

        # Raises cryptography.exceptions.InvalidTag on tampering or wrong key
        plaintext = AESGCM(key).decrypt(nonce, base64.b64decode(base64_ciphertext, validate=True) + auth_tag, None)

        return _b64(plaintext) if is_binary else plaintext.decode("utf-8")


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
