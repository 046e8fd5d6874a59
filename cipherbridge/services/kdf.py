"""
Password-based key derivation.

derive_key runs PBKDF2-HMAC-SHA512 for a 32-byte key and returns the first
32 characters of its base64 text. The truncated string is what existing
callers store and later hand to encrypt as a 32-byte key, so the format is
fixed.
"""

import base64
import logging
from typing import Optional, Union

from ..config import CipherBridgeConfig
from ..encoding import is_bytes_like
from ..errors import CipherBridgeError, InvalidDataError, ProviderError
from ..providers.base import KDFProvider

logger = logging.getLogger(__name__)

OPERATION = "derive_key"


class KeyDerivation:
    """Wraps a KDFProvider to turn password + salt into a key string."""

    def __init__(self, provider: KDFProvider, config: Optional[CipherBridgeConfig] = None):
        self.provider = provider
        self.config = config or CipherBridgeConfig()

    async def derive_key(self, password: str, salt: Union[bytes, str], iterations: int) -> str:
        """
        Derive a key string from a password.

        Args:
            password: UTF-8 password text
            salt: Raw salt bytes, or the salt as hex text
            iterations: PBKDF2 iteration count

        Returns:
            The first derived_key_chars characters of the base64 derived key

        Raises:
            InvalidDataError: If salt is neither bytes nor valid hex text
            ProviderError: If the KDF provider fails
        """
        if is_bytes_like(salt):
            salt_bytes = bytes(salt)
        elif isinstance(salt, str):
            try:
                salt_bytes = bytes.fromhex(salt)
            except ValueError as e:
                raise InvalidDataError(f"Salt text must be hex: {e}", OPERATION) from e
        else:
            raise InvalidDataError(
                f"Salt must be bytes or hex text, got {type(salt).__name__}", OPERATION
            )

        logger.debug("Deriving key: %d salt bytes, %d iterations", len(salt_bytes), iterations)
        try:
            derived = await self.provider.hash(
                password,
                salt_bytes,
                iterations,
                self.config.kdf_key_length,
                self.config.kdf_algorithm,
            )
        except CipherBridgeError:
            raise
        except Exception as e:
            raise ProviderError(f"Key derivation failed: {e}", OPERATION, cause=e) from e

        return base64.b64encode(bytes(derived)).decode("ascii")[:self.config.derived_key_chars]
