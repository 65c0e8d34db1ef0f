"""Shared secrets and their base32 representation."""

import base64
import binascii
import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives import constant_time

from otp_core import config
from otp_core.algorithm import Algorithm
from otp_core.errors import InvalidSecretLengthError, SecretDecodeError


logger = logging.getLogger(__name__)


def encode(value: bytes) -> str:
    """Encode bytes as unpadded RFC 4648 base32."""
    return base64.b32encode(value).decode("ascii").rstrip("=")


def decode(string: str) -> bytes:
    """
    Decode unpadded RFC 4648 base32 (case-insensitive).

    Raises:
        SecretDecodeError: If the string is not valid unpadded base32.
    """
    if "=" in string or not string.isascii():
        raise SecretDecodeError(string)
    padded = string + "=" * (-len(string) % 8)
    try:
        return base64.b32decode(padded, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError(string) from e


@dataclass(frozen=True)
class Length:
    """Secret length in bytes, at least 16 unless unsafe lengths are enabled."""

    value: int = 20

    MIN = 16
    DEFAULT = 20

    def __post_init__(self) -> None:
        if self.value < 0:
            raise InvalidSecretLengthError(self.value)
        if self.value < self.MIN:
            if not config.get_settings().unsafe_length:
                raise InvalidSecretLengthError(self.value)
            logger.warning("Accepting unsafe secret length of %d bytes", self.value)

    @classmethod
    def for_algorithm(cls, algorithm: Algorithm) -> "Length":
        return cls(algorithm.recommended_length)

    def __int__(self) -> int:
        return self.value


class Secret:
    """
    Immutable secret bytes with constant-time equality.

    ``str(secret)`` is the base32 encoding; ``repr`` never shows the bytes.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[bytes, bytearray, memoryview]):
        """
        Args:
            value: Raw secret bytes.

        Raises:
            InvalidSecretLengthError: If the secret is too short.
        """
        value = bytes(value)
        Length(len(value))
        self._value = value

    @classmethod
    def decode(cls, string: str) -> "Secret":
        """
        Build a secret from its base32 encoding.

        Raises:
            SecretDecodeError: If the string is not valid base32.
            InvalidSecretLengthError: If the decoded secret is too short.
        """
        return cls(decode(string))

    @classmethod
    def generate(cls, length: Optional[Length] = None) -> "Secret":
        """Generate a secret from the operating system's CSPRNG."""
        if length is None:
            length = Length()
        return cls(secrets.token_bytes(length.value))

    @classmethod
    def generate_for(cls, algorithm: Algorithm) -> "Secret":
        return cls.generate(Length.for_algorithm(algorithm))

    @property
    def value(self) -> bytes:
        return self._value

    def encode(self) -> str:
        return encode(self._value)

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return constant_time.bytes_eq(self._value, other._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Secret(<{len(self._value)} bytes>)"
