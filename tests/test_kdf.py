"""
Tests for password-based key derivation.
"""

import base64
import hashlib
import re

import pytest

from cipherbridge import CipherBridgeConfig, ErrorKind, InvalidDataError, ProviderError
from cipherbridge.providers import Pbkdf2Provider
from cipherbridge.services import KeyDerivation

from conftest import FailingKDFProvider, RecordingKDFProvider, run

BASE64_CHARS = re.compile(r"^[A-Za-z0-9+/]{32}$")


def expected_key(password: str, salt: bytes, iterations: int) -> str:
    derived = hashlib.pbkdf2_hmac("sha512", password.encode("utf-8"), salt, iterations, 32)
    return base64.b64encode(derived).decode()[:32]


class TestDeriveKey:
    """Test derive_key against the default PBKDF2 provider."""

    def setup_method(self):
        self.kdf = KeyDerivation(Pbkdf2Provider(run_in_executor=False))

    def test_matches_pbkdf2_sha512(self):
        salt = bytes.fromhex("00112233445566778899aabbccddeeff")
        key = run(self.kdf.derive_key("correct horse battery staple", salt, 1000))
        assert key == expected_key("correct horse battery staple", salt, 1000)

    def test_output_is_32_base64_chars(self):
        for password in ["", "pw", "a much longer password with spaces ✓"]:
            key = run(self.kdf.derive_key(password, b"salt", 10))
            assert len(key) == 32
            assert BASE64_CHARS.match(key)

    def test_deterministic(self):
        first = run(self.kdf.derive_key("password", "deadbeef", 100))
        second = run(self.kdf.derive_key("password", "deadbeef", 100))
        assert first == second

    def test_salt_changes_output(self):
        first = run(self.kdf.derive_key("password", "deadbeef", 100))
        second = run(self.kdf.derive_key("password", "deadbeee", 100))
        assert first != second

    def test_hex_salt_equals_raw_salt(self):
        from_hex = run(self.kdf.derive_key("password", "a1b2c3d4", 50))
        from_bytes = run(self.kdf.derive_key("password", b"\xa1\xb2\xc3\xd4", 50))
        assert from_hex == from_bytes

    def test_executor_path_matches_inline(self):
        threaded = KeyDerivation(Pbkdf2Provider(run_in_executor=True))
        assert run(threaded.derive_key("pw", b"salt", 20)) == run(self.kdf.derive_key("pw", b"salt", 20))


class TestDeriveKeyContract:
    """Test what derive_key hands to the provider."""

    def test_provider_arguments(self):
        provider = RecordingKDFProvider()
        kdf = KeyDerivation(provider)

        run(kdf.derive_key("pw", "0a0b", 7))

        assert provider.calls == [("pw", b"\x0a\x0b", 7, 32, "SHA512")]

    def test_configured_lengths(self):
        config = CipherBridgeConfig(kdf_key_length=64, derived_key_chars=40)
        kdf = KeyDerivation(RecordingKDFProvider(), config)

        key = run(kdf.derive_key("pw", b"salt", 5))

        assert len(key) == 40

    def test_invalid_hex_salt(self):
        provider = RecordingKDFProvider()
        kdf = KeyDerivation(provider)

        with pytest.raises(InvalidDataError):
            run(kdf.derive_key("pw", "not-hex", 5))
        assert provider.calls == []

    def test_invalid_salt_type(self):
        with pytest.raises(InvalidDataError):
            run(KeyDerivation(RecordingKDFProvider()).derive_key("pw", 1234, 5))

    def test_provider_failure_is_wrapped(self):
        kdf = KeyDerivation(FailingKDFProvider())

        with pytest.raises(ProviderError) as exc_info:
            run(kdf.derive_key("pw", b"salt", 5))

        assert exc_info.value.kind is ErrorKind.PROVIDER
        assert exc_info.value.operation == "derive_key"
        assert isinstance(exc_info.value.cause, MemoryError)

    def test_zero_iterations_fails_in_provider(self):
        kdf = KeyDerivation(Pbkdf2Provider(run_in_executor=False))

        with pytest.raises(ProviderError):
            run(kdf.derive_key("pw", b"salt", 0))
