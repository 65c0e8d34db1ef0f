"""Wall-clock access for time-based codes."""

import time

from otp_core.errors import ClockBeforeEpochError


def now() -> int:
    """
    Return the current Unix time in whole seconds.

    Raises:
        ClockBeforeEpochError: If the system clock reads before the epoch.
    """
    seconds = time.time()
    if seconds < 0:
        raise ClockBeforeEpochError(seconds)
    return int(seconds)
