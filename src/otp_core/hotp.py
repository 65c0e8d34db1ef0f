"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from otp_core.base import Base
from otp_core.errors import CounterNotFoundError
from otp_core.otp import Otp, Type
from otp_core.values import Counter


logger = logging.getLogger(__name__)

COUNTER = "counter"


@dataclass
class Hotp(Otp, type_of=Type.HOTP):
    """
    Counter-based one-time passwords.

    The counter is never advanced implicitly: callers decide when a code
    has been accepted and call :meth:`increment`. Instances are not
    thread-safe; serialize access to a shared counter yourself.
    """

    base: Base
    counter: Counter = field(default_factory=Counter)

    def generate(self) -> int:
        """Generate the numeric code for the current counter."""
        return self.base.generate(self.counter.value)

    def generate_string(self) -> str:
        """Generate the zero-padded code for the current counter."""
        return self.base.generate_string(self.counter.value)

    def verify(self, code: int) -> bool:
        return self.base.verify(self.counter.value, code)

    def verify_string(self, code: str) -> bool:
        """Verify the code for the current counter in constant time."""
        return self.base.verify_string(self.counter.value, code)

    def increment(self) -> None:
        """
        Advance the counter by one.

        Raises:
            CounterOverflowError: If the counter is at its maximum value.
        """
        self.counter = self.counter.incremented()
        logger.debug("HOTP counter advanced to %d", self.counter.value)

    def try_increment(self) -> bool:
        """
        Advance the counter by one if possible.

        Returns:
            ``False`` (leaving the counter untouched) at the maximum value.
        """
        following = self.counter.checked_incremented()
        if following is None:
            return False
        self.counter = following
        logger.debug("HOTP counter advanced to %d", self.counter.value)
        return True

    def query_for(self, params: List[Tuple[str, str]]) -> None:
        self.base.query_for(params)
        params.append((COUNTER, str(self.counter)))

    @classmethod
    def extract_variant(cls, query: Dict[str, str]) -> "Hotp":
        """
        Consume the shared parameters plus the required ``counter``.

        Raises:
            CounterNotFoundError: If ``counter`` is missing.
            IntegerParseError: If ``counter`` is not an unsigned 64-bit integer.
        """
        base = Base.extract_from(query)
        if COUNTER not in query:
            raise CounterNotFoundError()
        counter = Counter.parse(query.pop(COUNTER))
        return cls(base=base, counter=counter)
