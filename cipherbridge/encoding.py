"""
Encoding negotiation for cipherbridge.

Caller-facing payloads arrive as raw bytes or as text in a named encoding.
This module resolves them once, at the API boundary, into tagged variants
(RawBytes or EncodedText) and converts between the variants and the base64
strings the providers speak.

Text encodings follow Node-style buffer names:
- base64: standard base64 alphabet with padding
- hex: lowercase hexadecimal (input is case-insensitive)
- utf8: UTF-8 text; undecodable bytes round-trip via surrogate escapes
- binary: latin-1, one character per byte
"""

import base64
import binascii
import enum
from dataclasses import dataclass
from typing import Optional, Type, TypeVar, Union

from .errors import InvalidDataError


class PlainDataEncoding(str, enum.Enum):
    """How caller-supplied plaintext is interpreted before encryption."""
    UTF8 = "utf8"
    BINARY = "binary"
    BASE64 = "base64"


class EncryptedDataEncoding(str, enum.Enum):
    """How EncryptedData.content is encoded."""
    BASE64 = "base64"
    HEX = "hex"
    BINARY = "binary"
    UTF8 = "utf8"


class DigestEncoding(str, enum.Enum):
    """Output encoding of a content digest."""
    BASE64 = "base64"
    HEX = "hex"


BytesLike = Union[bytes, bytearray, memoryview]
Payload = Union[BytesLike, str]

E = TypeVar("E", bound=enum.Enum)

# Python codec names for the text encodings above
_CODECS = {
    "utf8": ("utf-8", "surrogateescape"),
    "binary": ("latin-1", "strict"),
}


@dataclass(frozen=True)
class RawBytes:
    """Payload already held as bytes."""
    data: bytes


@dataclass(frozen=True)
class EncodedText:
    """Payload held as text in a named encoding."""
    text: str
    encoding: str


def coerce_encoding(value, enum_type: Type[E], operation: str = None) -> Optional[E]:
    """
    Map an encoding name or enum member onto `enum_type`.

    Args:
        value: None, an enum member or its string value
        enum_type: Target encoding enum
        operation: Operation name recorded on the error

    Returns:
        The enum member, or None when value is None

    Raises:
        InvalidDataError: If the name is not a member of enum_type
    """
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidDataError(
            f"Unsupported encoding {value!r}, expected one of: {allowed}",
            operation,
        ) from None


def is_bytes_like(value) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def resolve_payload(data: Payload, encoding: Optional[str],
                    operation: str = None) -> Union[RawBytes, EncodedText, None]:
    """
    Decide once whether a payload is raw bytes or encoded text.

    Returns None for text with no declared encoding; callers decide whether
    that defaults or fails.
    """
    if is_bytes_like(data):
        return RawBytes(bytes(data))
    if isinstance(data, str):
        if encoding is None:
            return None
        return EncodedText(data, str(getattr(encoding, "value", encoding)))
    raise InvalidDataError(
        f"Payload must be bytes or str, got {type(data).__name__}", operation
    )


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str, operation: str = None) -> bytes:
    """Decode standard base64 text, raising InvalidDataError on bad input."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataError(f"Invalid base64 content: {e}", operation) from e


def text_to_bytes(text: str, encoding: str, operation: str = None) -> bytes:
    """
    Decode text in a named encoding into bytes.

    Raises:
        InvalidDataError: If the text is not valid for the encoding
    """
    if encoding == "base64":
        return b64decode(text, operation)
    if encoding == "hex":
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise InvalidDataError(f"Invalid hex content: {e}", operation) from e
    codec, errors = _CODECS[encoding]
    try:
        return text.encode(codec, errors)
    except UnicodeEncodeError as e:
        raise InvalidDataError(f"Content is not valid {encoding} text: {e}", operation) from e


def bytes_to_text(data: bytes, encoding: str) -> str:
    """Encode bytes into text in a named encoding."""
    if encoding == "base64":
        return b64encode(data)
    if encoding == "hex":
        return data.hex()
    codec, errors = _CODECS[encoding]
    return data.decode(codec, errors)


def to_base64(payload: Union[RawBytes, EncodedText], operation: str = None) -> str:
    """Normalize a resolved payload to a base64 string."""
    if isinstance(payload, RawBytes):
        return b64encode(payload.data)
    if payload.encoding == "base64":
        b64decode(payload.text, operation)
        return payload.text
    return b64encode(text_to_bytes(payload.text, payload.encoding, operation))
