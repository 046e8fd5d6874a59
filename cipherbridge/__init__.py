"""
cipherbridge: an encoding-aware adaptation layer over symmetric crypto providers.

Exposes four asynchronous operations with a uniform calling convention:

- derive_key: PBKDF2-HMAC-SHA512 password-based key derivation
- calc_md5_hash: MD5 content fingerprints as hex or base64
- encrypt / decrypt: AES-256-GCM with payloads as bytes, base64, hex or UTF-8

The primitives themselves come from pluggable providers. The defaults use
the cryptography package and hashlib.

Basic Usage:
    >>> import asyncio
    >>> from cipherbridge import create_cipher_bridge
    >>>
    >>> bridge = create_cipher_bridge()
    >>> key = asyncio.run(bridge.derive_key("hunter2", "a1b2c3d4", 10000))
    >>>
    >>> sealed = asyncio.run(bridge.encrypt(key, "Hello, world!", output_encoding="base64"))
    >>> asyncio.run(bridge.decrypt(key, sealed, output_encoding="utf8", input_encoding="base64"))
    'Hello, world!'
"""

__version__ = "1.0.0"

from typing import Any, Mapping, Optional, Union

from .config import CipherBridgeConfig, ConfigError
from .encoding import DigestEncoding, EncryptedDataEncoding, PlainDataEncoding
from .errors import (
    CipherBridgeError,
    ErrorKind,
    InvalidDataError,
    InvalidKeyError,
    ProviderError,
    Result,
    settle,
)
from .key_cache import KeyEncoder
from .providers import (
    AesGcmCipherProvider,
    CipherProvider,
    DigestProvider,
    HashlibDigestProvider,
    KDFProvider,
    Pbkdf2Provider,
    SealedData,
)
from .services import ALGORITHM, CipherService, EncryptedData, HashService, KeyDerivation


class CipherBridge:
    """
    High-level entry point bundling the three services.

    Owns its KeyEncoder, so two bridges never share cached keys.
    """

    def __init__(self, cipher: CipherProvider, digest: DigestProvider, kdf: KDFProvider,
                 config: Optional[CipherBridgeConfig] = None):
        """
        Initialize the bridge.

        Args:
            cipher: AES-256-GCM provider
            digest: MD5 provider
            kdf: PBKDF2 provider
            config: Settings; defaults to CipherBridgeConfig()
        """
        self.config = config or CipherBridgeConfig()
        self.key_encoder = KeyEncoder(self.config.key_cache_max_entries)
        self.cipher_service = CipherService(cipher, self.key_encoder)
        self.hash_service = HashService(digest)
        self.key_derivation = KeyDerivation(kdf, self.config)

    async def derive_key(self, password: str, salt: Union[bytes, str], iterations: int) -> str:
        return await self.key_derivation.derive_key(password, salt, iterations)

    async def calc_md5_hash(self, content: Union[bytes, str],
                            output_encoding: Union[DigestEncoding, str] = DigestEncoding.BASE64) -> str:
        return await self.hash_service.calc_md5_hash(content, output_encoding)

    async def calc_string_md5_hash(self, text: str,
                                   output_encoding: Union[DigestEncoding, str] = DigestEncoding.HEX) -> str:
        return await self.hash_service.calc_string_md5_hash(text, output_encoding)

    async def encrypt(self, key: str, data: Union[bytes, str],
                      output_encoding: Union[EncryptedDataEncoding, str, None] = None,
                      input_encoding: Union[PlainDataEncoding, str, None] = None) -> EncryptedData:
        return await self.cipher_service.encrypt(key, data, output_encoding, input_encoding)

    async def decrypt(self, key: str, data: Union[EncryptedData, Mapping[str, Any]],
                      output_encoding: Union[PlainDataEncoding, str, None] = None,
                      input_encoding: Union[EncryptedDataEncoding, str, None] = None) -> Union[bytes, str]:
        return await self.cipher_service.decrypt(key, data, output_encoding, input_encoding)


def create_cipher_bridge(config: Optional[CipherBridgeConfig] = None,
                         cipher: Optional[CipherProvider] = None,
                         digest: Optional[DigestProvider] = None,
                         kdf: Optional[KDFProvider] = None) -> CipherBridge:
    """
    Create a CipherBridge, filling in default providers.

    Args:
        config: Settings; defaults to CipherBridgeConfig()
        cipher: AES-256-GCM provider; defaults to AesGcmCipherProvider
        digest: MD5 provider; defaults to HashlibDigestProvider
        kdf: PBKDF2 provider; defaults to Pbkdf2Provider

    Returns:
        CipherBridge ready for use
    """
    config = config or CipherBridgeConfig()
    return CipherBridge(
        cipher or AesGcmCipherProvider(),
        digest or HashlibDigestProvider(),
        kdf or Pbkdf2Provider(run_in_executor=config.run_kdf_in_executor),
        config,
    )


__all__ = [
    # Version info
    '__version__',

    # High-level interface
    'CipherBridge',
    'create_cipher_bridge',

    # Services
    'ALGORITHM',
    'CipherService',
    'EncryptedData',
    'HashService',
    'KeyDerivation',
    'KeyEncoder',

    # Encodings
    'DigestEncoding',
    'EncryptedDataEncoding',
    'PlainDataEncoding',

    # Providers
    'CipherProvider',
    'DigestProvider',
    'KDFProvider',
    'SealedData',
    'AesGcmCipherProvider',
    'HashlibDigestProvider',
    'Pbkdf2Provider',

    # Errors
    'CipherBridgeError',
    'ErrorKind',
    'InvalidDataError',
    'InvalidKeyError',
    'ProviderError',
    'Result',
    'settle',

    # Configuration
    'CipherBridgeConfig',
    'ConfigError',
]
