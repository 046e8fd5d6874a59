"""
Error types for cipherbridge.

Every failure raised by the adaptation layer is a CipherBridgeError tagged
with an ErrorKind, so callers can match on a single exception type:

- INVALID_KEY: the key argument is not text
- INVALID_DATA: the payload is malformed or its encoding cannot be determined
- PROVIDER: the cipher, digest or KDF provider raised
"""

import enum
from dataclasses import dataclass
from typing import Any, Awaitable, Optional


class ErrorKind(enum.Enum):
    """Tag carried by every CipherBridgeError."""
    INVALID_KEY = "invalid_key"
    INVALID_DATA = "invalid_data"
    PROVIDER = "provider"


class CipherBridgeError(Exception):
    """Base exception for cipherbridge."""

    kind: ErrorKind = ErrorKind.PROVIDER

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class InvalidKeyError(CipherBridgeError):
    """Raised when the key argument is not a string."""

    kind = ErrorKind.INVALID_KEY


class InvalidDataError(CipherBridgeError):
    """Raised when input data is malformed or its encoding is unknown."""

    kind = ErrorKind.INVALID_DATA


class ProviderError(CipherBridgeError):
    """Raised when a provider fails. The original exception is kept as `cause`."""

    kind = ErrorKind.PROVIDER

    def __init__(self, message: str, operation: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, operation)
        self.cause = cause


@dataclass(frozen=True)
class Result:
    """Outcome of an operation: exactly one of `value` or `error` is meaningful."""

    value: Any = None
    error: Optional[CipherBridgeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


async def settle(awaitable: Awaitable) -> Result:
    """
    Await an operation and capture its outcome as a Result.

    Only CipherBridgeError is captured; anything else propagates.

    Args:
        awaitable: Coroutine returned by one of the public operations

    Returns:
        Result holding either the value or the tagged error
    """
    try:
        return Result(value=await awaitable)
    except CipherBridgeError as e:
        return Result(error=e)
