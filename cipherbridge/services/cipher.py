"""
AES-256-GCM encryption with encoding negotiation.

CipherService sits between callers, who hold payloads as bytes or as text in
any of several encodings, and a CipherProvider, which only speaks base64
strings. Every boundary crossing goes through cipherbridge.encoding so each
payload is classified exactly once.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..encoding import (
    EncryptedDataEncoding,
    PlainDataEncoding,
    RawBytes,
    b64decode,
    bytes_to_text,
    coerce_encoding,
    resolve_payload,
    to_base64,
)
from ..errors import CipherBridgeError, InvalidDataError, InvalidKeyError, ProviderError
from ..key_cache import KeyEncoder
from ..providers.base import CipherProvider

logger = logging.getLogger(__name__)

ALGORITHM = "aes-256-gcm"


@dataclass(frozen=True)
class EncryptedData:
    """
    Result of encrypt, input of decrypt.

    content is bytes or text depending on the requested output encoding;
    iv and tag are always base64.
    """

    content: Union[bytes, str]
    iv: str
    tag: str
    algorithm: str = ALGORITHM

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncryptedData":
        """
        Build from any mapping carrying content, iv and tag.

        Raises:
            InvalidDataError: If the mapping lacks a required field
        """
        if not isinstance(data, Mapping):
            raise InvalidDataError(
                f"Invalid data, it must be a mapping, got {type(data).__name__}", "decrypt"
            )
        missing = [name for name in ("content", "iv", "tag") if name not in data]
        if missing:
            raise InvalidDataError(f"Invalid data, missing fields: {', '.join(missing)}", "decrypt")
        return cls(
            content=data["content"],
            iv=data["iv"],
            tag=data["tag"],
            algorithm=data.get("algorithm", ALGORITHM),
        )


class CipherService:
    """Encrypts and decrypts through a CipherProvider, translating encodings."""

    def __init__(self, provider: CipherProvider, key_encoder: Optional[KeyEncoder] = None):
        self.provider = provider
        self.key_encoder = key_encoder if key_encoder is not None else KeyEncoder()

    def _encode_key(self, key: str, operation: str) -> str:
        if not isinstance(key, str):
            raise InvalidKeyError("Invalid key. It must be a str", operation)
        return self.key_encoder.encode(key)

    async def encrypt(self, key: str, data: Union[bytes, str],
                      output_encoding: Union[EncryptedDataEncoding, str, None] = None,
                      input_encoding: Union[PlainDataEncoding, str, None] = None) -> EncryptedData:
        """
        Encrypt data with AES-256-GCM.

        Args:
            key: Key text; its UTF-8 bytes are the AES key
            data: Plaintext as bytes, or as text in input_encoding
            output_encoding: Encoding of the returned content; None for bytes
            input_encoding: Encoding of text data; defaults to utf8

        Returns:
            EncryptedData with base64 iv and tag

        Raises:
            InvalidKeyError: If key is not a str
            InvalidDataError: If an encoding is unknown or data is malformed
            ProviderError: If the cipher provider fails
        """
        key_base64 = self._encode_key(key, "encrypt")
        output_encoding = coerce_encoding(output_encoding, EncryptedDataEncoding, "encrypt")
        input_encoding = coerce_encoding(input_encoding, PlainDataEncoding, "encrypt")

        payload = resolve_payload(data, input_encoding or PlainDataEncoding.UTF8, "encrypt")
        if isinstance(payload, RawBytes):
            is_binary = True
            plain = to_base64(payload, "encrypt")
        elif payload.encoding == PlainDataEncoding.BASE64.value:
            is_binary = True
            plain = to_base64(payload, "encrypt")
        else:
            # utf8 and binary text reach the provider unchanged
            is_binary = payload.encoding == PlainDataEncoding.BINARY.value
            plain = payload.text

        logger.debug("Encrypting (binary=%s, output=%s)", is_binary,
                     output_encoding.value if output_encoding else "bytes")
        try:
            sealed = await self.provider.encrypt(plain, is_binary, key_base64)
        except CipherBridgeError:
            raise
        except Exception as e:
            raise ProviderError(f"Encryption failed: {e}", "encrypt", cause=e) from e

        return EncryptedData(
            content=self._encode_content(sealed.content, output_encoding),
            iv=sealed.iv,
            tag=sealed.tag,
        )

    @staticmethod
    def _encode_content(content_base64: str, encoding: Optional[EncryptedDataEncoding]) -> Union[bytes, str]:
        if encoding is EncryptedDataEncoding.BASE64:
            return content_base64
        raw = b64decode(content_base64, "encrypt")
        if encoding is None or encoding is EncryptedDataEncoding.BINARY:
            return raw
        return bytes_to_text(raw, encoding.value)

    async def decrypt(self, key: str, data: Union[EncryptedData, Mapping[str, Any]],
                      output_encoding: Union[PlainDataEncoding, str, None] = None,
                      input_encoding: Union[EncryptedDataEncoding, str, None] = None) -> Union[bytes, str]:
        """
        Decrypt and authenticate an EncryptedData.

        Args:
            key: Key text used to encrypt
            data: EncryptedData or a mapping with content, iv and tag
            output_encoding: binary for bytes, utf8 for text, base64 or None
                for base64 text
            input_encoding: Encoding of data.content when it is text

        Returns:
            The plaintext in the requested form

        Raises:
            InvalidKeyError: If key is not a str
            InvalidDataError: If data is not mapping-shaped or its content
                encoding cannot be determined
            ProviderError: If the cipher provider fails, including on
                authentication failure
        """
        key_base64 = self._encode_key(key, "decrypt")
        output_encoding = coerce_encoding(output_encoding, PlainDataEncoding, "decrypt")
        input_encoding = coerce_encoding(input_encoding, EncryptedDataEncoding, "decrypt")
        if not isinstance(data, EncryptedData):
            data = EncryptedData.from_dict(data)

        is_binary = output_encoding in (None, PlainDataEncoding.BINARY, PlainDataEncoding.BASE64)

        payload = resolve_payload(data.content, input_encoding, "decrypt")
        if payload is None:
            raise InvalidDataError(
                "Invalid data, content is text but no input encoding was given", "decrypt"
            )
        ciphertext = to_base64(payload, "decrypt")

        logger.debug("Decrypting (content=%s, binary=%s)",
                     "bytes" if isinstance(payload, RawBytes) else payload.encoding, is_binary)
        try:
            unsealed = await self.provider.decrypt(ciphertext, key_base64, data.iv, data.tag, is_binary)
        except CipherBridgeError:
            raise
        except Exception as e:
            raise ProviderError(f"Decryption failed: {e}", "decrypt", cause=e) from e

        if output_encoding is PlainDataEncoding.BINARY:
            return b64decode(unsealed, "decrypt")
        return unsealed

