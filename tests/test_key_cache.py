"""
Tests for the memoized key encoder.
"""

import asyncio
import base64

import pytest

from cipherbridge.key_cache import KeyEncoder


class TestKeyEncoder:
    """Test key encoding and caching."""

    def test_encodes_utf8_as_base64(self):
        encoder = KeyEncoder()
        assert encoder.encode("correct-horse") == base64.b64encode(b"correct-horse").decode()
        assert encoder.encode("clé") == base64.b64encode("clé".encode("utf-8")).decode()

    def test_repeat_lookup_converts_once(self):
        encoder = KeyEncoder()

        first = encoder.encode("correct-horse")
        second = encoder.encode("correct-horse")

        assert first == second
        assert encoder.conversions == 1
        assert len(encoder) == 1

    def test_one_entry_per_distinct_key(self):
        encoder = KeyEncoder()
        for key in ["a", "b", "c", "a", "b"]:
            encoder.encode(key)

        assert len(encoder) == 3
        assert encoder.conversions == 3

    def test_raw_key_not_used_as_index(self):
        encoder = KeyEncoder()
        encoder.encode("secret-key")

        assert "secret-key" in encoder
        assert "secret-key" not in encoder._cache

    def test_bounded_cache_evicts_least_recent(self):
        encoder = KeyEncoder(max_entries=2)
        encoder.encode("a")
        encoder.encode("b")
        encoder.encode("a")  # refresh "a"
        encoder.encode("c")  # evicts "b"

        assert len(encoder) == 2
        assert "a" in encoder
        assert "b" not in encoder
        assert "c" in encoder

    def test_clear(self):
        encoder = KeyEncoder()
        encoder.encode("a")
        encoder.clear()

        assert len(encoder) == 0
        encoder.encode("a")
        assert encoder.conversions == 2

    def test_invalid_bound(self):
        with pytest.raises(ValueError):
            KeyEncoder(max_entries=0)

    def test_concurrent_first_use_is_consistent(self):
        encoder = KeyEncoder()

        async def encode_many():
            async def one():
                await asyncio.sleep(0)
                return encoder.encode("shared-key")
            return await asyncio.gather(*(one() for _ in range(20)))

        results = asyncio.run(encode_many())

        assert len(set(results)) == 1
        assert len(encoder) == 1

    def test_cached_value_is_the_encoded_key(self):
        encoder = KeyEncoder()
        encoder.encode("secret-key")

        (value,) = encoder._cache.values()
        assert base64.b64decode(value) == b"secret-key"
