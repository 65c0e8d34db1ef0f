"""Validated scalar values: digits, period, skew and counter."""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from otp_core.errors import (
    CounterOverflowError,
    IntegerParseError,
    InvalidDigitsError,
    InvalidPeriodError,
)


U64_MAX = 2**64 - 1

_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_u64(string: str) -> int:
    """
    Parse an unsigned 64-bit decimal integer.

    Only ASCII digits with an optional leading ``+`` are accepted; no
    whitespace, underscores or signs other than ``+``.

    Raises:
        IntegerParseError: If the string is malformed or out of range.
    """
    if not _UNSIGNED.fullmatch(string):
        raise IntegerParseError(string)
    value = int(string)
    if value > U64_MAX:
        raise IntegerParseError(string)
    return value


@dataclass(frozen=True)
class Digits:
    """Number of decimal digits in a code, between 6 and 8 inclusive."""

    value: int = 6

    MIN = 6
    MAX = 8
    DEFAULT = 6

    def __post_init__(self) -> None:
        if not self.MIN <= self.value <= self.MAX:
            raise InvalidDigitsError(self.value)

    @classmethod
    def parse(cls, string: str) -> "Digits":
        return cls(parse_u64(string))

    def power(self) -> int:
        """Return ``10 ** digits``, the modulus applied to truncated values."""
        return 10**self.value

    def string(self, code: int) -> str:
        """Format ``code`` zero-padded to exactly ``digits`` characters."""
        return f"{code:0{self.value}d}"

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Period:
    """TOTP time step in seconds, at least 1."""

    value: int = 30

    MIN = 1
    DEFAULT = 30

    def __post_init__(self) -> None:
        if self.value < self.MIN:
            raise InvalidPeriodError(self.value)

    @classmethod
    def parse(cls, string: str) -> "Period":
        return cls(parse_u64(string))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Skew:
    """Half-width of the TOTP verification window; 0 means exact match."""

    value: int = 0

    DISABLED = 0
    DEFAULT = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= U64_MAX:
            raise IntegerParseError(str(self.value))

    @classmethod
    def parse(cls, string: str) -> "Skew":
        return cls(parse_u64(string))

    @classmethod
    def disabled(cls) -> "Skew":
        return cls(cls.DISABLED)

    def apply(self, value: int) -> Iterator[int]:
        """
        Enumerate the moving factors accepted around ``value``.

        Yields ``value - skew, ..., value - 1, value, value + 1, ...,
        value + skew``. Candidates outside the unsigned 64-bit range are
        skipped.
        """
        for offset in range(self.value, 0, -1):
            if value - offset >= 0:
                yield value - offset
        yield value
        for offset in range(1, self.value + 1):
            if value + offset <= U64_MAX:
                yield value + offset

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Counter:
    """HOTP moving factor, an unsigned 64-bit integer."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= U64_MAX:
            raise IntegerParseError(str(self.value))

    @classmethod
    def parse(cls, string: str) -> "Counter":
        return cls(parse_u64(string))

    def checked_incremented(self) -> Optional["Counter"]:
        """Return the next counter, or ``None`` if already at the maximum."""
        if self.value == U64_MAX:
            return None
        return Counter(self.value + 1)

    def incremented(self) -> "Counter":
        """
        Return the next counter.

        Raises:
            CounterOverflowError: If the counter is already at the maximum.
        """
        following = self.checked_incremented()
        if following is None:
            raise CounterOverflowError(self.value)
        return following

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
