"""Polymorphic handling of HOTP and TOTP."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Dict, List, Tuple, Type as TypingType

from otp_core.base import Base
from otp_core.errors import TypeParseError


class Type(Enum):
    """OTP type, as found in the host of an ``otpauth://`` URL."""

    HOTP = "hotp"
    TOTP = "totp"

    @classmethod
    def parse(cls, string: str) -> "Type":
        """
        Parse a case-sensitive type name.

        Raises:
            TypeParseError: If the string is neither ``hotp`` nor ``totp``.
        """
        try:
            return cls(string)
        except ValueError as e:
            raise TypeParseError(string) from e

    def __str__(self) -> str:
        return self.value


class Otp(ABC):
    """
    Base class for :class:`~otp_core.hotp.Hotp` and :class:`~otp_core.totp.Totp`.

    Subclasses register themselves for a :class:`Type` with
    ``class Hotp(Otp, type_of=Type.HOTP)``.
    """

    _variants: ClassVar[Dict[Type, TypingType["Otp"]]] = {}

    TYPE: ClassVar[Type]

    base: Base

    def __init_subclass__(cls, type_of: Type, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.TYPE = type_of
        Otp._variants[type_of] = cls

    def type_of(self) -> Type:
        return self.TYPE

    def into_base(self) -> Base:
        return self.base

    @abstractmethod
    def query_for(self, params: List[Tuple[str, str]]) -> None:
        """Append this variant's own URL parameters to ``params``."""

    @classmethod
    @abstractmethod
    def extract_variant(cls, query: Dict[str, str]) -> "Otp":
        """Consume this variant's parameters from ``query``."""

    @staticmethod
    def extract_from(query: Dict[str, str], type_of: Type) -> "Otp":
        """Consume the parameters of the OTP variant selected by ``type_of``."""
        return Otp._variants[type_of].extract_variant(query)
