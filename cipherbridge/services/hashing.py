"""MD5 content fingerprints."""

import base64
import logging
from typing import Union

from ..encoding import DigestEncoding, b64decode, coerce_encoding, is_bytes_like
from ..errors import CipherBridgeError, InvalidDataError, ProviderError
from ..providers.base import DigestProvider

logger = logging.getLogger(__name__)

OPERATION = "calc_md5_hash"
STRING_OPERATION = "calc_string_md5_hash"


class HashService:
    """Wraps a DigestProvider and encodes digests for the caller."""

    def __init__(self, provider: DigestProvider):
        self.provider = provider

    async def calc_md5_hash(self, content: Union[bytes, str],
                            output_encoding: Union[DigestEncoding, str] = DigestEncoding.BASE64) -> str:
        """
        Fingerprint content with MD5.

        Args:
            content: Raw bytes, or the content as base64 text
            output_encoding: "hex" or "base64"

        Returns:
            The 16-byte digest as hex or base64 text

        Raises:
            InvalidDataError: If content is not bytes or valid base64 text
            ProviderError: If the digest provider fails
        """
        encoding = coerce_encoding(output_encoding, DigestEncoding, OPERATION)
        if is_bytes_like(content):
            data = bytes(content)
        elif isinstance(content, str):
            data = b64decode(content, OPERATION)
        else:
            raise InvalidDataError(
                f"Content must be bytes or base64 text, got {type(content).__name__}", OPERATION
            )

        logger.debug("Hashing %d bytes", len(data))
        hex_hash = self._call(self.provider.binary_md5, data, OPERATION)
        return self._encode(hex_hash, encoding)

    async def calc_string_md5_hash(self, text: str,
                                   output_encoding: Union[DigestEncoding, str] = DigestEncoding.HEX) -> str:
        """Fingerprint the UTF-8 bytes of a text string with MD5."""
        encoding = coerce_encoding(output_encoding, DigestEncoding, STRING_OPERATION)
        if not isinstance(text, str):
            raise InvalidDataError(f"Text must be str, got {type(text).__name__}", STRING_OPERATION)
        return self._encode(self._call(self.provider.string_md5, text, STRING_OPERATION), encoding)

    @staticmethod
    def _call(func, data, operation: str) -> str:
        try:
            return func(data)
        except CipherBridgeError:
            raise
        except Exception as e:
            raise ProviderError(f"Digest failed: {e}", operation, cause=e) from e

    @staticmethod
    def _encode(hex_hash: str, encoding: DigestEncoding) -> str:
        if encoding is DigestEncoding.HEX:
            return hex_hash
        return base64.b64encode(bytes.fromhex(hex_hash)).decode("ascii")
