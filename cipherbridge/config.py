"""
Configuration management for cipherbridge.

Settings come from built-in defaults, a JSON file, or CIPHERBRIDGE_*
environment variables. Every source is validated the same way and a bad
value raises ConfigError.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "CIPHERBRIDGE_"

SUPPORTED_KDF_ALGORITHMS = ("SHA512",)


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


@dataclass
class CipherBridgeConfig:
    """
    Settings shared by the services of one CipherBridge instance.

    Attributes:
        key_cache_max_entries: Bound on the key cache, None for unbounded
        kdf_key_length: Bytes requested from the KDF provider
        kdf_algorithm: Hash name passed to the KDF provider
        derived_key_chars: Length of the base64 text returned by derive_key
        run_kdf_in_executor: Run PBKDF2 off the event loop thread
    """

    key_cache_max_entries: Optional[int] = None
    kdf_key_length: int = 32
    kdf_algorithm: str = "SHA512"
    derived_key_chars: int = 32
    run_kdf_in_executor: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check every setting.

        Raises:
            ConfigError: If a setting is out of range
        """
        if self.key_cache_max_entries is not None and self.key_cache_max_entries < 1:
            raise ConfigError("key_cache_max_entries must be a positive integer or null")
        if self.kdf_key_length < 1:
            raise ConfigError("kdf_key_length must be positive")
        if self.kdf_algorithm not in SUPPORTED_KDF_ALGORITHMS:
            raise ConfigError(f"Unsupported kdf_algorithm: {self.kdf_algorithm}")
        if self.derived_key_chars < 1:
            raise ConfigError("derived_key_chars must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "CipherBridgeConfig":
        """
        Build a config from a mapping of raw values.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        unknown = set(values) - set(known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs = {}
        for name, value in values.items():
            kwargs[name] = _coerce(name, value)
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str) -> "CipherBridgeConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to a JSON object with configuration keys

        Raises:
            ConfigError: If the file is missing or malformed
        """
        if not os.path.exists(path):
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                values = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

        if not isinstance(values, dict):
            raise ConfigError(f"Configuration file {path} must contain a JSON object")

        logger.debug("Loaded configuration from %s", path)
        return cls.from_dict(values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CipherBridgeConfig":
        """
        Load configuration from CIPHERBRIDGE_* environment variables.

        Unset variables keep their defaults. The value "none" (any case)
        clears key_cache_max_entries.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is not None:
                values[f.name] = raw
        return cls.from_dict(values)


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw setting (possibly an env string) to its field type."""
    try:
        if name == "key_cache_max_entries":
            if value is None or (isinstance(value, str) and value.strip().lower() in ("", "none", "null")):
                return None
            return _to_int(value)
        if name in ("kdf_key_length", "derived_key_chars"):
            return _to_int(value)
        if name == "run_kdf_in_executor":
            return _to_bool(value)
        if name == "kdf_algorithm":
            return str(value).upper()
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e
    return value


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    return int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
    raise ValueError(f"not a boolean: {value!r}")
