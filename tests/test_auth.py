"""Tests for otpauth:// URL parsing and building."""

import pytest

from otp_core.algorithm import Algorithm
from otp_core.auth import Auth, Label, Part, build_url, parse_url
from otp_core.base import Base
from otp_core.errors import (
    CounterNotFoundError,
    IntegerParseError,
    InvalidDigitsError,
    InvalidPeriodError,
    InvalidSecretLengthError,
    IssuerMismatchError,
    LabelEmptyError,
    ParseUrlError,
    PartEmptyError,
    PartEncodeError,
    PartSeparatorError,
    SchemeMismatchError,
    SecretDecodeError,
    SecretNotFoundError,
    TypeNotFoundError,
    TypeParseError,
    UnknownAlgorithmError,
    UrlParseError,
    Utf8DecodeError,
)
from otp_core.hotp import Hotp
from otp_core.otp import Type
from otp_core.secret import Secret
from otp_core.totp import Totp
from otp_core.values import U64_MAX, Counter, Digits, Period


SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def parse_error(url: str):
    """Parse ``url`` expecting failure and return the underlying error."""
    with pytest.raises(ParseUrlError) as excinfo:
        Auth.parse_url(url)
    assert excinfo.value.string == url
    assert excinfo.value.__cause__ is excinfo.value.source
    return excinfo.value.source


def test_part():
    assert Part("ab").value == "ab"

    with pytest.raises(PartEmptyError):
        Part("")
    with pytest.raises(PartSeparatorError) as excinfo:
        Part("a:b")
    assert excinfo.value.string == "a:b"


def test_part_rejects_unencodable_text():
    with pytest.raises(PartEncodeError) as excinfo:
        Part("\ud800")
    assert excinfo.value.string == "\ud800"

    with pytest.raises(PartEncodeError):
        Label(user=Part("alice"), issuer=Part("Bad\udcff"))


def test_build_url_with_non_ascii_label():
    auth = Auth(
        otp=Totp(base=Base(secret=Secret.decode(SECRET))),
        label=Label(user=Part("j\u00fcrgen"), issuer=Part("\u00c9xample")),
    )

    url = auth.build_url()

    assert url.startswith("otpauth://totp/%C3%89xample:j%C3%BCrgen?")
    assert Auth.parse_url(url) == auth


def test_label_parse():
    assert Label.parse("alice") == Label(user=Part("alice"))
    assert Label.parse("Issuer:alice") == Label(user=Part("alice"), issuer=Part("Issuer"))

    with pytest.raises(LabelEmptyError):
        Label.parse("")
    with pytest.raises(PartEmptyError):
        Label.parse(":alice")
    with pytest.raises(PartEmptyError):
        Label.parse("Issuer:")
    with pytest.raises(PartSeparatorError):
        Label.parse("Issuer:alice:bob")


def test_label_decode_splits_after_decoding():
    label = Label.decode("Big%20Corp%3Aalice%40example.com")

    assert label.issuer == Part("Big Corp")
    assert label.user == Part("alice@example.com")


def test_label_decode_invalid_utf8():
    with pytest.raises(Utf8DecodeError):
        Label.decode("%FF%FE")


def test_parse_totp_url():
    auth = parse_url(
        f"otpauth://totp/ACME%20Co:john.doe@email.com?secret={SECRET}"
        "&issuer=ACME%20Co&algorithm=SHA256&digits=7&period=60"
    )

    assert isinstance(auth.otp, Totp)
    assert auth.otp.type_of() is Type.TOTP
    assert auth.otp.base.secret == Secret(b"12345678901234567890")
    assert auth.otp.base.algorithm is Algorithm.SHA256
    assert auth.otp.base.digits == Digits(7)
    assert auth.otp.period == Period(60)
    assert auth.label.issuer == Part("ACME Co")
    assert auth.label.user == Part("john.doe@email.com")


def test_parse_hotp_url_defaults():
    auth = parse_url(f"otpauth://hotp/alice?secret={SECRET}&counter=5")

    assert isinstance(auth.otp, Hotp)
    assert auth.otp.counter == Counter(5)
    assert auth.otp.base.algorithm is Algorithm.SHA1
    assert auth.otp.base.digits == Digits(6)
    assert auth.label.issuer is None
    assert auth.otp.generate_string() == "254676"


def test_parse_totp_url_defaults():
    auth = parse_url(f"otpauth://totp/alice?secret={SECRET}")

    assert auth.otp.period == Period(30)
    assert auth.otp.base.digits == Digits(6)
    assert auth.otp.base.algorithm is Algorithm.SHA1


def test_parse_ignores_unknown_parameters():
    auth = parse_url(f"otpauth://totp/alice?secret={SECRET}&image=https%3A%2F%2Fexample.com&foo=bar")
    assert auth.label.user == Part("alice")


def test_issuer_only_in_query():
    auth = parse_url(f"otpauth://totp/alice?secret={SECRET}&issuer=Example")

    assert auth.label.issuer == Part("Example")
    assert auth.label.user == Part("alice")


def test_issuer_matches():
    auth = parse_url(f"otpauth://totp/Issuer:alice?secret={SECRET}&issuer=Issuer")
    assert auth.label.issuer == Part("Issuer")


def test_issuer_mismatch():
    error = parse_error(f"otpauth://totp/Issuer:alice?secret={SECRET}&issuer=Other")

    assert isinstance(error, IssuerMismatchError)
    assert error.label_issuer == "Issuer"
    assert error.query_issuer == "Other"


@pytest.mark.parametrize(
    "url, error_type",
    [
        ("not a url", UrlParseError),
        ("otpauth://[::1/alice", UrlParseError),
        (f"https://totp/alice?secret={SECRET}", SchemeMismatchError),
        (f"otpauth:///alice?secret={SECRET}", TypeNotFoundError),
        (f"otpauth://motp/alice?secret={SECRET}", TypeParseError),
        (f"otpauth://TOTP/alice?secret={SECRET}", TypeParseError),
        (f"otpauth://totp/?secret={SECRET}", LabelEmptyError),
        (f"otpauth://totp/:alice?secret={SECRET}", PartEmptyError),
        (f"otpauth://totp/a:b:c?secret={SECRET}", PartSeparatorError),
        (f"otpauth://totp/%FF?secret={SECRET}", Utf8DecodeError),
        (f"otpauth://totp/alice?secret={SECRET}&issuer=", PartEmptyError),
        ("otpauth://totp/alice?digits=6", SecretNotFoundError),
        ("otpauth://totp/alice?secret=not-base32!", SecretDecodeError),
        ("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP", InvalidSecretLengthError),
        (f"otpauth://totp/alice?secret={SECRET}&algorithm=MD5", UnknownAlgorithmError),
        (f"otpauth://totp/alice?secret={SECRET}&digits=9", InvalidDigitsError),
        (f"otpauth://totp/alice?secret={SECRET}&digits=x", IntegerParseError),
        (f"otpauth://totp/alice?secret={SECRET}&period=0", InvalidPeriodError),
        (f"otpauth://totp/alice?secret={SECRET}&period=-30", IntegerParseError),
        (f"otpauth://hotp/alice?secret={SECRET}", CounterNotFoundError),
        (f"otpauth://hotp/alice?secret={SECRET}&counter=-1", IntegerParseError),
        (f"otpauth://hotp/alice?secret={SECRET}&counter={U64_MAX + 1}", IntegerParseError),
    ],
)
def test_parse_errors(url, error_type):
    assert isinstance(parse_error(url), error_type)


def test_parse_error_message_omits_secret():
    with pytest.raises(ParseUrlError) as excinfo:
        parse_url(f"otpauth://totp/Issuer:alice?secret={SECRET}&issuer=Other")
    assert SECRET not in str(excinfo.value)


def test_build_totp_url():
    base = Base(secret=Secret(b"12345678901234567890"))
    auth = Auth(
        otp=Totp(base=base),
        label=Label(user=Part("alice@example.com"), issuer=Part("Big Corp")),
    )

    assert auth.base_url() == "otpauth://totp/Big%20Corp:alice%40example.com"
    assert build_url(auth) == (
        "otpauth://totp/Big%20Corp:alice%40example.com"
        f"?secret={SECRET}&algorithm=SHA1&digits=6&period=30&issuer=Big%20Corp"
    )


def test_build_hotp_url():
    base = Base(secret=Secret(b"12345678901234567890"), algorithm=Algorithm.SHA512, digits=Digits(8))
    auth = Auth(otp=Hotp(base=base, counter=Counter(42)), label=Label(user=Part("bob")))

    assert auth.build_url() == (
        f"otpauth://hotp/bob?secret={SECRET}&algorithm=SHA512&digits=8&counter=42"
    )


ROUND_TRIP_AUTHS = [
    Auth(
        otp=Totp(base=Base(secret=Secret(b"12345678901234567890"))),
        label=Label(user=Part("alice")),
    ),
    Auth(
        otp=Totp(
            base=Base(secret=Secret(b"x" * 64), algorithm=Algorithm.SHA512, digits=Digits(8)),
            period=Period(1),
        ),
        label=Label(user=Part("alice@example.com"), issuer=Part("Big Corp")),
    ),
    Auth(
        otp=Hotp(
            base=Base(secret=Secret(bytes(range(32))), algorithm=Algorithm.SHA256, digits=Digits(7)),
            counter=Counter(U64_MAX),
        ),
        label=Label(user=Part("пользователь/100% ?#&="), issuer=Part("Ünïcødé & Co.")),
    ),
    Auth(
        otp=Hotp(base=Base(secret=Secret(b"\x00" * 17))),
        label=Label(user=Part("+plus+")),
    ),
]


@pytest.mark.parametrize("auth", ROUND_TRIP_AUTHS)
def test_round_trip(auth):
    assert Auth.parse_url(auth.build_url()) == auth


def test_from_parts():
    otp = Totp(base=Base(secret=Secret(b"12345678901234567890")))
    label = Label(user=Part("alice"))
    auth = Auth.from_parts((otp, label))

    assert auth.parts == (otp, label)
