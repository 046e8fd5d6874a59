"""
Provider contracts and default implementations.

- CipherProvider: AES-256-GCM (default: cryptography AESGCM)
- DigestProvider: MD5 (default: hashlib)
- KDFProvider: PBKDF2-HMAC-SHA512 (default: cryptography PBKDF2HMAC)
"""

from .base import CipherProvider, DigestProvider, KDFProvider, SealedData
from .aes_gcm import AesGcmCipherProvider
from .md5 import HashlibDigestProvider
from .pbkdf2 import Pbkdf2Provider

__all__ = [
    'CipherProvider',
    'DigestProvider',
    'KDFProvider',
    'SealedData',
    'AesGcmCipherProvider',
    'HashlibDigestProvider',
    'Pbkdf2Provider',
]
