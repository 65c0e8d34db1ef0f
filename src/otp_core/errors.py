"""Exception types raised by otp-core."""

from typing import Optional


class OTPError(Exception):
    """Base class for every error raised by this package."""


class InvalidDigitsError(OTPError, ValueError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"expected digits in [6, 8] range, got {value}")


class InvalidPeriodError(OTPError, ValueError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"expected period to be at least 1, got {value}")


class InvalidSecretLengthError(OTPError, ValueError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"expected secret length of at least 16, got {length}")


class UnknownAlgorithmError(OTPError, ValueError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"unknown algorithm {string!r}")


class AlgorithmDisabledError(OTPError, ValueError):
    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"algorithm {algorithm!r} is not enabled")


class IntegerParseError(OTPError, ValueError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"failed to parse {string!r} as an unsigned 64-bit integer")


class SecretDecodeError(OTPError, ValueError):
    def __init__(self, string: str):
        self.string = string
        super().__init__("failed to decode base32 secret")


class InvalidTimeError(OTPError, ValueError):
    def __init__(self, time: int):
        self.time = time
        super().__init__(f"expected time in [0, 2**64 - 1] range, got {time}")


class ClockBeforeEpochError(OTPError, RuntimeError):
    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__("system time is before the epoch")


class CounterOverflowError(OTPError, OverflowError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"counter {value} has no successor")


class AuthError(OTPError, ValueError):
    """Base class for errors in the ``otpauth://`` URL layer."""


class UrlParseError(AuthError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to parse OTP URL: {reason}")


class SchemeMismatchError(AuthError):
    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(f"unexpected scheme {scheme!r}; expected 'otpauth'")


class TypeNotFoundError(AuthError):
    def __init__(self):
        super().__init__("failed to find OTP type")


class TypeParseError(AuthError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"failed to parse {string!r} into type; expected 'hotp' or 'totp'")


class LabelEmptyError(AuthError):
    def __init__(self):
        super().__init__("empty label encountered")


class PartEmptyError(AuthError):
    def __init__(self):
        super().__init__("the label part is empty")


class PartSeparatorError(AuthError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"unexpected ':' in {string!r}")


class Utf8DecodeError(AuthError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"percent-decoded {string!r} is not valid UTF-8")


class PartEncodeError(AuthError):
    def __init__(self, string: str):
        self.string = string
        super().__init__(f"label part {string!r} can not be encoded as UTF-8")


class IssuerMismatchError(AuthError):
    def __init__(self, label_issuer: str, query_issuer: str):
        self.label_issuer = label_issuer
        self.query_issuer = query_issuer
        super().__init__(
            f"issuer in label ({label_issuer!r}) does not match "
            f"issuer in query ({query_issuer!r})"
        )


class SecretNotFoundError(AuthError):
    def __init__(self):
        super().__init__("failed to find secret")


class CounterNotFoundError(AuthError):
    def __init__(self):
        super().__init__("failed to find counter")


class ParseUrlError(AuthError):
    """Raised by :meth:`otp_core.auth.Auth.parse_url` for any failure.

    The underlying error is kept in ``source`` (and as ``__cause__``).
    """

    def __init__(self, string: str, source: Optional[OTPError] = None):
        self.string = string
        self.source = source
        super().__init__(f"failed to extract auth from URL: {source}")
