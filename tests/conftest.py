import base64

import pytest

import pytotp


def b32(raw: bytes) -> str:
    return base64.b32encode(raw).decode("ascii")


# RFC 6238 appendix B seeds
SECRET_SHA1 = b32(b"12345678901234567890")
SECRET_SHA256 = b32(b"12345678901234567890123456789012")
SECRET_SHA512 = b32(b"1234567890123456789012345678901234567890123456789012345678901234")


@pytest.fixture
def rfc_totp():
    """SHA-1 engine from the RFC 6238 test vectors, 8 digits, no skew."""
    return pytotp.new(pytotp.Config(secret=SECRET_SHA1, digits=8, period=30, skew=0))
