"""MD5 digest provider backed by hashlib."""

import hashlib
from typing import Union

from .base import DigestProvider


class HashlibDigestProvider(DigestProvider):
    """
    DigestProvider using hashlib.md5.

    MD5 is used for content fingerprinting only, never for security.
    """

    def binary_md5(self, data: Union[str, bytes]) -> str:
        if isinstance(data, str):
            # binary string: one character per byte
            data = data.encode("latin-1")
        return _md5(bytes(data)).hexdigest()

    def string_md5(self, data: str) -> str:
        return _md5(data.encode("utf-8")).hexdigest()


def _md5(data: bytes):
    # FIPS builds refuse md5 unless marked as non-security use
    return hashlib.md5(data, usedforsecurity=False)
