"""
Shared fixtures and fake providers for the cipherbridge test suite.
"""

import asyncio
import base64
import hashlib
import hmac
import os

import pytest

from cipherbridge import CipherBridgeConfig, create_cipher_bridge
from cipherbridge.providers import CipherProvider, DigestProvider, KDFProvider, SealedData

# 32 characters, so its UTF-8 bytes make a valid AES-256 key
AES_KEY = "0123456789abcdef0123456789abcdef"


def run(coro):
    """Drive a coroutine to completion."""
    return asyncio.run(coro)


def _keystream(key: bytes, iv: bytes, length: int) -> bytes:
    stream = b""
    counter = 0
    while len(stream) < length:
        stream += hashlib.sha256(key + iv + counter.to_bytes(4, "big")).digest()
        counter += 1
    return stream[:length]


class FakeCipherProvider(CipherProvider):
    """
    Reversible stand-in for AES-GCM that accepts keys of any length.

    Records every call so tests can assert on what crossed the boundary.
    """

    def __init__(self):
        self.calls = []

    async def encrypt(self, plain_text, is_binary, base64_key):
        self.calls.append(("encrypt", plain_text, is_binary, base64_key))
        key = base64.b64decode(base64_key)
        data = base64.b64decode(plain_text) if is_binary else plain_text.encode("utf-8")
        iv = os.urandom(12)
        ciphertext = bytes(a ^ b for a, b in zip(data, _keystream(key, iv, len(data))))
        tag = hmac.new(key, iv + ciphertext, hashlib.sha256).digest()[:16]
        return SealedData(
            iv=base64.b64encode(iv).decode(),
            tag=base64.b64encode(tag).decode(),
            content=base64.b64encode(ciphertext).decode(),
        )

    async def decrypt(self, base64_ciphertext, base64_key, iv, tag, is_binary):
        self.calls.append(("decrypt", base64_ciphertext, base64_key, iv, tag, is_binary))
        key = base64.b64decode(base64_key)
        nonce = base64.b64decode(iv)
        ciphertext = base64.b64decode(base64_ciphertext)
        expected = hmac.new(key, nonce + ciphertext, hashlib.sha256).digest()[:16]
        if not hmac.compare_digest(expected, base64.b64decode(tag)):
            raise ValueError("authentication failed")
        data = bytes(a ^ b for a, b in zip(ciphertext, _keystream(key, nonce, len(ciphertext))))
        return base64.b64encode(data).decode() if is_binary else data.decode("utf-8")


class FailingCipherProvider(CipherProvider):
    """Cipher provider whose every call raises."""

    def __init__(self):
        self.calls = 0

    async def encrypt(self, plain_text, is_binary, base64_key):
        self.calls += 1
        raise RuntimeError("cipher backend unavailable")

    async def decrypt(self, base64_ciphertext, base64_key, iv, tag, is_binary):
        self.calls += 1
        raise RuntimeError("cipher backend unavailable")


class RecordingDigestProvider(DigestProvider):
    """hashlib-backed digest provider that records its inputs."""

    def __init__(self):
        self.inputs = []

    def binary_md5(self, data):
        self.inputs.append(data)
        if isinstance(data, str):
            data = data.encode("latin-1")
        return hashlib.md5(data).hexdigest()

    def string_md5(self, data):
        self.inputs.append(data)
        return hashlib.md5(data.encode("utf-8")).hexdigest()


class RecordingKDFProvider(KDFProvider):
    """hashlib-backed PBKDF2 provider that records its arguments."""

    def __init__(self):
        self.calls = []

    async def hash(self, password, salt, iterations, key_length, algorithm="SHA512"):
        self.calls.append((password, salt, iterations, key_length, algorithm))
        if isinstance(password, str):
            password = password.encode("utf-8")
        return hashlib.pbkdf2_hmac(algorithm.lower(), password, salt, iterations, key_length)


class FailingKDFProvider(KDFProvider):
    async def hash(self, password, salt, iterations, key_length, algorithm="SHA512"):
        raise MemoryError("out of memory")


@pytest.fixture
def fake_cipher():
    return FakeCipherProvider()


@pytest.fixture
def bridge():
    """Bridge wired to the default providers."""
    return create_cipher_bridge(CipherBridgeConfig(run_kdf_in_executor=False))


@pytest.fixture
def fake_bridge(fake_cipher):
    """Bridge whose cipher provider is the recording fake."""
    return create_cipher_bridge(cipher=fake_cipher)
