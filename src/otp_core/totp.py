"""RFC 6238 TOTP (Time-based One-Time Password) implementation."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from otp_core import clock
from otp_core.base import Base
from otp_core.errors import InvalidTimeError
from otp_core.otp import Otp, Type
from otp_core.values import U64_MAX, Period, Skew


PERIOD = "period"


def check_time(time: int) -> int:
    if not 0 <= time <= U64_MAX:
        raise InvalidTimeError(time)
    return time


@dataclass(frozen=True)
class Totp(Otp, type_of=Type.TOTP):
    """
    Time-based one-time passwords.

    Every operation has an ``*_at(time)`` form taking Unix seconds and a
    wall-clock form. Times outside the unsigned 64-bit range raise
    :class:`~otp_core.errors.InvalidTimeError`; the wall-clock forms raise
    :class:`~otp_core.errors.ClockBeforeEpochError` if the clock reads
    before the epoch.
    """

    base: Base
    skew: Skew = field(default_factory=Skew)
    period: Period = field(default_factory=Period)

    def input_at(self, time: int) -> int:
        """Return the moving factor (time step) for ``time``."""
        return check_time(time) // self.period.value

    def next_period_at(self, time: int) -> int:
        """Return the time at which the period after ``time``'s starts."""
        period = self.period.value
        return (check_time(time) // period + 1) * period

    def next_period(self) -> int:
        return self.next_period_at(clock.now())

    def time_to_live_at(self, time: int) -> int:
        """Return the seconds left before the code at ``time`` expires."""
        period = self.period.value
        return period - check_time(time) % period

    def time_to_live(self) -> int:
        return self.time_to_live_at(clock.now())

    def generate_at(self, time: int) -> int:
        return self.base.generate(self.input_at(time))

    def generate(self) -> int:
        return self.generate_at(clock.now())

    def generate_string_at(self, time: int) -> str:
        return self.base.generate_string(self.input_at(time))

    def generate_string(self) -> str:
        return self.generate_string_at(clock.now())

    def verify_exact_at(self, time: int, code: int) -> bool:
        return self.base.verify(self.input_at(time), code)

    def verify_exact(self, code: int) -> bool:
        return self.verify_exact_at(clock.now(), code)

    def verify_string_exact_at(self, time: int, code: str) -> bool:
        return self.base.verify_string(self.input_at(time), code)

    def verify_string_exact(self, code: str) -> bool:
        return self.verify_string_exact_at(clock.now(), code)

    def candidates_at(self, time: int) -> Iterator[int]:
        """Moving factors accepted at ``time`` given the configured skew."""
        return self.skew.apply(self.input_at(time))

    def verify_at(self, time: int, code: int) -> bool:
        """Verify numerically against every step in the skew window."""
        return any(self.base.verify(step, code) for step in self.candidates_at(time))

    def verify(self, code: int) -> bool:
        return self.verify_at(clock.now(), code)

    def verify_string_at(self, time: int, code: str) -> bool:
        """Verify in constant time against every step in the skew window."""
        return any(
            self.base.verify_string(step, code) for step in self.candidates_at(time)
        )

    def verify_string(self, code: str) -> bool:
        return self.verify_string_at(clock.now(), code)

    def query_for(self, params: List[Tuple[str, str]]) -> None:
        self.base.query_for(params)
        params.append((PERIOD, str(self.period)))

    @classmethod
    def extract_variant(cls, query: Dict[str, str]) -> "Totp":
        """
        Consume the shared parameters plus the optional ``period``.

        Raises:
            IntegerParseError: If ``period`` is not an unsigned 64-bit integer.
            InvalidPeriodError: If ``period`` is zero.
        """
        base = Base.extract_from(query)
        period = Period()
        if PERIOD in query:
            period = Period.parse(query.pop(PERIOD))
        return cls(base=base, period=period)
