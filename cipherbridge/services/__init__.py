"""Services behind the public operations."""

from .cipher import ALGORITHM, CipherService, EncryptedData
from .hashing import HashService
from .kdf import KeyDerivation

__all__ = [
    'ALGORITHM',
    'CipherService',
    'EncryptedData',
    'HashService',
    'KeyDerivation',
]
