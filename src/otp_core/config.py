"""Runtime settings for otp-core.

Settings are read once from the environment and can be replaced at
runtime with :func:`configure` or, temporarily, with :func:`override`.
"""

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterator, Mapping, Optional

from otp_core.errors import OTPError, UnknownAlgorithmError


logger = logging.getLogger(__name__)

UNSAFE_LENGTH_ENV = "OTP_CORE_UNSAFE_LENGTH"
ALGORITHMS_ENV = "OTP_CORE_ALGORITHMS"

# SHA1 is mandatory per RFC 4226 and can never be disabled.
REQUIRED_ALGORITHM = "SHA1"
KNOWN_ALGORITHMS = frozenset({"SHA1", "SHA256", "SHA512"})

TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """
    Process-wide otp-core settings.

    Attributes:
        unsafe_length: Accept secrets shorter than the minimum length.
        algorithms: Names of the enabled HMAC algorithms, matched
            case-insensitively and stored upper-case.
    """

    unsafe_length: bool = False
    algorithms: FrozenSet[str] = field(default=KNOWN_ALGORITHMS)

    def __post_init__(self) -> None:
        algorithms = frozenset(name.upper() for name in self.algorithms)
        unknown = algorithms - KNOWN_ALGORITHMS
        if unknown:
            raise UnknownAlgorithmError(",".join(sorted(unknown)))
        object.__setattr__(self, "algorithms", algorithms | {REQUIRED_ALGORITHM})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``).

        Returns:
            Settings instance.
        """
        if environ is None:
            environ = os.environ

        unsafe_length = environ.get(UNSAFE_LENGTH_ENV, "").strip().lower() in TRUTHY

        raw_algorithms = environ.get(ALGORITHMS_ENV)
        if raw_algorithms is None or not raw_algorithms.strip():
            algorithms = KNOWN_ALGORITHMS
        else:
            algorithms = frozenset(
                name.strip() for name in raw_algorithms.split(",") if name.strip()
            )

        return cls(unsafe_length=unsafe_length, algorithms=algorithms)


def load(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment, falling back to the defaults."""
    try:
        return Settings.from_env(environ)
    except OTPError as e:
        logger.warning("Ignoring invalid %s: %s", ALGORITHMS_ENV, e)
        return Settings()


_settings = load()


def get_settings() -> Settings:
    """Return the active settings."""
    return _settings


def configure(**changes) -> Settings:
    """
    Replace fields of the active settings.

    Returns:
        The previous settings, so callers can restore them.
    """
    global _settings
    previous = _settings
    _settings = replace(previous, **changes)
    if _settings.unsafe_length and not previous.unsafe_length:
        logger.warning("Unsafe secret lengths enabled; short secrets will be accepted")
    return previous


@contextmanager
def override(**changes) -> Iterator[Settings]:
    """Temporarily replace fields of the active settings."""
    global _settings
    previous = configure(**changes)
    try:
        yield _settings
    finally:
        _settings = previous
