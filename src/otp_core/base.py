"""RFC 4226 code derivation shared by HOTP and TOTP."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from cryptography.hazmat.primitives import constant_time

from otp_core.algorithm import Algorithm
from otp_core.errors import SecretNotFoundError
from otp_core.secret import Secret
from otp_core.values import Digits


SECRET = "secret"
ALGORITHM = "algorithm"
DIGITS = "digits"

MASK = 0x7FFFFFFF
HALF_BYTE = 0x0F


@dataclass(frozen=True)
class Base:
    """
    Secret, algorithm and digits: everything needed to turn a moving
    factor into a code.
    """

    secret: Secret
    algorithm: Algorithm = Algorithm.SHA1
    digits: Digits = field(default_factory=Digits)

    def __post_init__(self) -> None:
        self.algorithm.check_enabled()

    def generate(self, moving_factor: int) -> int:
        """
        Generate the numeric code for ``moving_factor``.

        Args:
            moving_factor: Counter or time step, an unsigned 64-bit integer.

        Returns:
            Code in ``[0, 10 ** digits)``.

        Raises:
            OverflowError: If the moving factor does not fit in 8 bytes.
        """
        message = moving_factor.to_bytes(8, byteorder="big")
        digest = self.algorithm.hmac(self.secret.value, message)

        # Dynamic truncation (RFC 4226, Section 5.3)
        offset = digest[-1] & HALF_BYTE
        value = int.from_bytes(digest[offset : offset + 4], byteorder="big") & MASK

        return value % self.digits.power()

    def generate_string(self, moving_factor: int) -> str:
        return self.digits.string(self.generate(moving_factor))

    def verify(self, moving_factor: int, code: int) -> bool:
        """Compare numerically; not constant time."""
        return self.generate(moving_factor) == code

    def verify_string(self, moving_factor: int, code: str) -> bool:
        """Compare the formatted code in constant time."""
        return constant_time.bytes_eq(
            self.generate_string(moving_factor).encode("utf-8"),
            code.encode("utf-8"),
        )

    def query_for(self, params: List[Tuple[str, str]]) -> None:
        """Append the shared ``otpauth://`` query parameters."""
        params.append((SECRET, self.secret.encode()))
        params.append((ALGORITHM, self.algorithm.value))
        params.append((DIGITS, str(self.digits)))

    @classmethod
    def extract_from(cls, query: Dict[str, str]) -> "Base":
        """
        Consume ``secret``, ``algorithm`` and ``digits`` from ``query``.

        Raises:
            SecretNotFoundError: If ``secret`` is missing.
            SecretDecodeError: If ``secret`` is not valid base32.
            InvalidSecretLengthError: If the decoded secret is too short.
            UnknownAlgorithmError: If ``algorithm`` is not recognized.
            IntegerParseError: If ``digits`` is not an integer.
            InvalidDigitsError: If ``digits`` is out of range.
        """
        if SECRET not in query:
            raise SecretNotFoundError()
        secret = Secret.decode(query.pop(SECRET))

        algorithm = Algorithm.default()
        if ALGORITHM in query:
            algorithm = Algorithm.parse(query.pop(ALGORITHM))

        digits = Digits()
        if DIGITS in query:
            digits = Digits.parse(query.pop(DIGITS))

        return cls(secret=secret, algorithm=algorithm, digits=digits)
