"""HMAC algorithms supported for code derivation."""

import hashlib
import hmac
from enum import Enum

from otp_core import config
from otp_core.errors import AlgorithmDisabledError, UnknownAlgorithmError


class Algorithm(Enum):
    """Hash function used in the HMAC; SHA1 is the default."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def default(cls) -> "Algorithm":
        return cls.SHA1

    @classmethod
    def parse(cls, string: str) -> "Algorithm":
        """
        Parse a case-sensitive algorithm name.

        Raises:
            UnknownAlgorithmError: If the name is not one of SHA1, SHA256, SHA512.
            AlgorithmDisabledError: If the algorithm is disabled in settings.
        """
        try:
            algorithm = cls(string)
        except ValueError as e:
            raise UnknownAlgorithmError(string) from e
        algorithm.check_enabled()
        return algorithm

    @classmethod
    def enabled(cls) -> list["Algorithm"]:
        names = config.get_settings().algorithms
        return [algorithm for algorithm in cls if algorithm.value in names]

    def check_enabled(self) -> None:
        if self.value not in config.get_settings().algorithms:
            raise AlgorithmDisabledError(self.value)

    @property
    def recommended_length(self) -> int:
        """Recommended secret length in bytes (the digest size)."""
        return _RECOMMENDED_LENGTHS[self]

    @property
    def digestmod(self):
        return _DIGESTS[self]

    def hmac(self, key: bytes, message: bytes) -> bytes:
        """Compute the HMAC of ``message`` under ``key``; any key length is valid."""
        return hmac.new(key, message, self.digestmod).digest()

    def __str__(self) -> str:
        return self.value


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}

_RECOMMENDED_LENGTHS = {
    Algorithm.SHA1: 20,
    Algorithm.SHA256: 32,
    Algorithm.SHA512: 64,
}
