"""Tests for polymorphic OTP handling."""

import pytest

from otp_core.base import Base
from otp_core.errors import TypeParseError
from otp_core.hotp import Hotp
from otp_core.otp import Otp, Type
from otp_core.secret import Secret
from otp_core.totp import Totp
from otp_core.values import Counter, Period


SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_type_parse():
    assert Type.parse("hotp") is Type.HOTP
    assert Type.parse("totp") is Type.TOTP
    assert str(Type.TOTP) == "totp"

    with pytest.raises(TypeParseError) as excinfo:
        Type.parse("Hotp")
    assert excinfo.value.string == "Hotp"


def test_extract_dispatches_on_type():
    query = {"secret": SECRET, "counter": "3", "period": "60"}
    hotp = Otp.extract_from(dict(query), Type.HOTP)
    totp = Otp.extract_from(dict(query), Type.TOTP)

    assert isinstance(hotp, Hotp)
    assert hotp.counter == Counter(3)
    assert isinstance(totp, Totp)
    assert totp.period == Period(60)


def test_extract_consumes_parameters():
    query = {"secret": SECRET, "counter": "3", "digits": "6", "image": "x"}
    Otp.extract_from(query, Type.HOTP)

    assert query == {"image": "x"}


def test_shared_base():
    base = Base(secret=Secret.decode(SECRET))
    otps = [Hotp(base=base), Totp(base=base)]

    assert [otp.type_of() for otp in otps] == [Type.HOTP, Type.TOTP]
    assert all(otp.into_base() is base for otp in otps)


def test_query_for():
    base = Base(secret=Secret.decode(SECRET))
    hotp_params, totp_params = [], []

    Hotp(base=base, counter=Counter(2)).query_for(hotp_params)
    Totp(base=base).query_for(totp_params)

    assert hotp_params[-1] == ("counter", "2")
    assert totp_params[-1] == ("period", "30")
    assert hotp_params[:3] == totp_params[:3]


def test_otp_is_abstract():
    assert Otp.__abstractmethods__ == frozenset({"query_for", "extract_variant"})

    with pytest.raises(TypeError):
        Otp()
