"""Generating and verifying HOTP/TOTP one-time passwords and otpauth:// URLs."""

from otp_core.algorithm import Algorithm
from otp_core.auth import Auth, Label, Part, build_url, parse_url
from otp_core.base import Base
from otp_core.hotp import Hotp
from otp_core.otp import Otp, Type
from otp_core.secret import Length, Secret
from otp_core.totp import Totp
from otp_core.values import Counter, Digits, Period, Skew

__version__ = "0.1.0"
