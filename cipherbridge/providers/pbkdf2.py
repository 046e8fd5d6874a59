"""PBKDF2 provider backed by the cryptography package."""

import asyncio
import functools
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .base import KDFProvider

_ALGORITHMS = {
    "SHA512": hashes.SHA512,
}


class Pbkdf2Provider(KDFProvider):
    """
    KDFProvider using cryptography's PBKDF2HMAC.

    PBKDF2 is deliberately slow, so by default the derivation runs in the
    event loop's default executor.
    """

    def __init__(self, run_in_executor: bool = True):
        self.run_in_executor = run_in_executor

    async def hash(self, password: Union[bytes, str], salt: Union[bytes, str],
                   iterations: int, key_length: int, algorithm: str = "SHA512") -> bytes:
        derive = functools.partial(_derive, password, salt, iterations, key_length, algorithm)
        if not self.run_in_executor:
            return derive()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, derive)


def _derive(password, salt, iterations: int, key_length: int, algorithm: str) -> bytes:
    try:
        hash_type = _ALGORITHMS[algorithm.upper()]
    except KeyError:
        raise ValueError(f"Unsupported PBKDF2 algorithm: {algorithm}") from None
    if iterations < 1:
        raise ValueError("PBKDF2 iterations must be a positive integer")

    if isinstance(password, str):
        password = password.encode("utf-8")
    if isinstance(salt, str):
        salt = salt.encode("utf-8")

    kdf = PBKDF2HMAC(
        algorithm=hash_type(),
        length=key_length,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(bytes(password))
