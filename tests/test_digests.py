import hashlib
import hmac

import pytest

from pytotp import digests
from pytotp.digests import Algorithm

KEY = b"12345678901234567890"
MSG = b"\x00\x00\x00\x00\x00\x00\x00\x01"

REFERENCE = [
    (Algorithm.SHA1, lambda: hashlib.sha1(), 20),
    (Algorithm.SHA224, lambda: hashlib.sha224(), 28),
    (Algorithm.SHA256, lambda: hashlib.sha256(), 32),
    (Algorithm.SHA384, lambda: hashlib.sha384(), 48),
    (Algorithm.SHA512, lambda: hashlib.sha512(), 64),
    (Algorithm.SHA3_224, lambda: hashlib.sha3_224(), 28),
    (Algorithm.SHA3_256, lambda: hashlib.sha3_256(), 32),
    (Algorithm.SHA3_384, lambda: hashlib.sha3_384(), 48),
    (Algorithm.SHA3_512, lambda: hashlib.sha3_512(), 64),
    (Algorithm.BLAKE2S_256, lambda: hashlib.blake2s(digest_size=32), 32),
    (Algorithm.BLAKE2B_256, lambda: hashlib.blake2b(digest_size=32), 32),
    (Algorithm.BLAKE2B_384, lambda: hashlib.blake2b(digest_size=48), 48),
    (Algorithm.BLAKE2B_512, lambda: hashlib.blake2b(digest_size=64), 64),
    (Algorithm.MD5, lambda: hashlib.md5(), 16),
]


def test_registry_is_complete():
    assert [a for a, _, _ in REFERENCE] == list(Algorithm)


@pytest.mark.parametrize("algorithm,reference,size", REFERENCE)
def test_new_hmac_matches_reference(algorithm, reference, size):
    expected = hmac.new(KEY, MSG, reference).digest()
    got = digests.new_hmac(algorithm, KEY, MSG).digest()
    assert got == expected
    assert len(got) == size
    assert digests.digest_size(algorithm) == size


def test_new_hmac_is_fresh():
    a = digests.new_hmac(Algorithm.SHA256, KEY)
    b = digests.new_hmac(Algorithm.SHA256, KEY)
    a.update(MSG)
    assert b.digest() == digests.new_hmac(Algorithm.SHA256, KEY).digest()
    assert a.digest() != b.digest()


@pytest.mark.parametrize(
    "value,expected",
    [
        (Algorithm.SHA512, Algorithm.SHA512),
        ("SHA1", Algorithm.SHA1),
        ("SHA-1", Algorithm.SHA1),
        ("sha256", Algorithm.SHA256),
        ("SHA-256", Algorithm.SHA256),
        ("SHA3-256", Algorithm.SHA3_256),
        ("sha3_512", Algorithm.SHA3_512),
        ("blake2b-384", Algorithm.BLAKE2B_384),
        (" md5 ", Algorithm.MD5),
    ],
)
def test_lookup(value, expected):
    assert digests.lookup(value) is expected


@pytest.mark.parametrize("value", ["whirlpool", "SHA", "", None, 0, hashlib.sha1])
def test_lookup_unsupported(value):
    assert digests.lookup(value) is None
