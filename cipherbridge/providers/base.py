"""Provider contracts consumed by the cipherbridge services."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SealedData:
    """Cipher provider output. All three fields are base64 text."""
    iv: str
    tag: str
    content: str


class CipherProvider(ABC):
    """AES-256-GCM provider interface."""

    @abstractmethod
    async def encrypt(self, plain_text: str, is_binary: bool, base64_key: str) -> SealedData:
        """
        Encrypt a plaintext string.

        Args:
            plain_text: Base64 of the plaintext bytes when is_binary, else UTF-8 text
            is_binary: Whether plain_text carries base64 bytes
            base64_key: The key bytes as base64

        Returns:
            SealedData with base64 iv, tag and ciphertext
        """

    @abstractmethod
    async def decrypt(self, base64_ciphertext: str, base64_key: str,
                      iv: str, tag: str, is_binary: bool) -> str:
        """
        Decrypt and authenticate a ciphertext.

        Returns:
            Base64 of the plaintext bytes when is_binary, else the UTF-8 text
        """


class DigestProvider(ABC):
    """MD5 provider interface."""

    @abstractmethod
    def binary_md5(self, data: Union[str, bytes]) -> str:
        """Hex MD5 of bytes, or of a binary string (one char per byte)."""

    @abstractmethod
    def string_md5(self, data: str) -> str:
        """Hex MD5 of the UTF-8 bytes of a text string."""


class KDFProvider(ABC):
    """PBKDF2 provider interface."""

    @abstractmethod
    async def hash(self, password: Union[bytes, str], salt: Union[bytes, str],
                   iterations: int, key_length: int, algorithm: str = "SHA512") -> bytes:
        """
        Derive key_length bytes from password and salt.

        Text password or salt is taken as UTF-8.
        """
