"""Parsing and building ``otpauth://`` URLs.

The format, as used by authenticator apps::

    otpauth://TYPE/ISSUER:USER?secret=BASE32&algorithm=SHA1&digits=6&period=30&issuer=ISSUER

The label separator ``:`` is reserved. A percent-encoded colon in the
path decodes to the same character, so it is indistinguishable from the
separator; the label is always split on the first colon after decoding.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, quote, unquote_to_bytes, urlencode, urlsplit

from otp_core.errors import (
    IssuerMismatchError,
    LabelEmptyError,
    OTPError,
    ParseUrlError,
    PartEmptyError,
    PartEncodeError,
    PartSeparatorError,
    SchemeMismatchError,
    TypeNotFoundError,
    UrlParseError,
    Utf8DecodeError,
)
from otp_core.hotp import Hotp  # noqa: F401  registers the HOTP variant
from otp_core.otp import Otp, Type
from otp_core.totp import Totp  # noqa: F401  registers the TOTP variant


logger = logging.getLogger(__name__)

SCHEME = "otpauth"
SEPARATOR = ":"
ISSUER = "issuer"


def percent_decode(string: str) -> str:
    """
    Percent-decode ``string`` strictly as UTF-8.

    Raises:
        Utf8DecodeError: If the decoded bytes are not valid UTF-8.
    """
    try:
        return unquote_to_bytes(string).decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8DecodeError(string) from e


def percent_encode(string: str) -> str:
    return quote(string, safe="")


@dataclass(frozen=True)
class Part:
    """Non-empty label component that never contains ``:``."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise PartEmptyError()
        if SEPARATOR in self.value:
            raise PartSeparatorError(self.value)
        try:
            self.value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise PartEncodeError(self.value) from e

    @classmethod
    def decode(cls, string: str) -> "Part":
        return cls(percent_decode(string))

    def encode(self) -> str:
        return percent_encode(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Label:
    """Account label: an optional issuer and a user."""

    user: Part
    issuer: Optional[Part] = None

    @classmethod
    def parse(cls, string: str) -> "Label":
        """
        Parse a decoded label, ``issuer:user`` or ``user``.

        Raises:
            LabelEmptyError: If the label is empty.
            PartEmptyError: If the issuer or user is empty.
            PartSeparatorError: If the user contains another ``:``.
        """
        if not string:
            raise LabelEmptyError()
        issuer, separator, user = string.partition(SEPARATOR)
        if not separator:
            return cls(user=Part(string))
        return cls(user=Part(user), issuer=Part(issuer))

    @classmethod
    def decode(cls, string: str) -> "Label":
        return cls.parse(percent_decode(string))

    def encode(self) -> str:
        """Percent-encode the label for use as a URL path."""
        if self.issuer is None:
            return self.user.encode()
        return f"{self.issuer.encode()}{SEPARATOR}{self.user.encode()}"

    def query_for(self, params: List[Tuple[str, str]]) -> None:
        if self.issuer is not None:
            params.append((ISSUER, self.issuer.value))

    @classmethod
    def extract_from(cls, query: Dict[str, str], path: str) -> "Label":
        """
        Build the label from the URL path and the ``issuer`` parameter.

        Raises:
            IssuerMismatchError: If both issuers are present and differ.
        """
        label = cls.decode(path[1:] if path.startswith("/") else path)

        if ISSUER not in query:
            return label
        issuer = Part(query.pop(ISSUER))

        if label.issuer is None:
            return cls(user=label.user, issuer=issuer)
        if label.issuer != issuer:
            raise IssuerMismatchError(label.issuer.value, issuer.value)
        return label

    def __str__(self) -> str:
        if self.issuer is None:
            return str(self.user)
        return f"{self.issuer}{SEPARATOR}{self.user}"


def check_scheme(scheme: str) -> None:
    if scheme != SCHEME:
        raise SchemeMismatchError(scheme)


def extract_type(host: str) -> Type:
    if not host:
        raise TypeNotFoundError()
    return Type.parse(host)


@dataclass
class Auth:
    """One ``otpauth://`` URL: an OTP configuration plus its label."""

    otp: Otp
    label: Label

    @classmethod
    def from_parts(cls, parts: Tuple[Otp, Label]) -> "Auth":
        otp, label = parts
        return cls(otp=otp, label=label)

    @property
    def parts(self) -> Tuple[Otp, Label]:
        return self.otp, self.label

    def base_url(self) -> str:
        return f"{SCHEME}://{self.otp.type_of()}/{self.label.encode()}"

    def query_for(self, params: List[Tuple[str, str]]) -> None:
        self.otp.query_for(params)
        self.label.query_for(params)

    def build_url(self) -> str:
        """Serialize to an ``otpauth://`` URL."""
        params: List[Tuple[str, str]] = []
        self.query_for(params)
        return f"{self.base_url()}?{urlencode(params, quote_via=quote)}"

    @classmethod
    def parse_url(cls, string: str) -> "Auth":
        """
        Parse an ``otpauth://`` URL.

        Unknown query parameters are ignored; when a parameter repeats,
        the last value wins.

        Raises:
            ParseUrlError: Wrapping the specific error in ``source``.
        """
        logger.debug("Parsing otpauth URL")
        try:
            auth = cls._parse_url(string)
        except OTPError as e:
            logger.warning("Failed to parse otpauth URL: %s", type(e).__name__)
            raise ParseUrlError(string, e) from e
        logger.debug("Parsed %s URL", auth.otp.type_of())
        return auth

    @classmethod
    def _parse_url(cls, string: str) -> "Auth":
        try:
            url = urlsplit(string)
        except ValueError as e:
            raise UrlParseError(str(e)) from e
        if not url.scheme:
            raise UrlParseError("relative URL without a scheme")

        check_scheme(url.scheme)
        type_of = extract_type(url.netloc)

        query = dict(parse_qsl(url.query, keep_blank_values=True))

        label = Label.extract_from(query, url.path)
        otp = Otp.extract_from(query, type_of)

        return cls(otp=otp, label=label)


def parse_url(string: str) -> Auth:
    """Shortcut for :meth:`Auth.parse_url`."""
    return Auth.parse_url(string)


def build_url(auth: Auth) -> str:
    """Shortcut for :meth:`Auth.build_url`."""
    return auth.build_url()
