import enum
import functools
import hashlib
import hmac
from typing import Any, Callable, Dict, Optional


class Algorithm(enum.Enum):
    """
    Hash functions the HMAC can be built on.
    """

    SHA1 = "SHA1"
    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    SHA3_224 = "SHA3_224"
    SHA3_256 = "SHA3_256"
    SHA3_384 = "SHA3_384"
    SHA3_512 = "SHA3_512"
    BLAKE2S_256 = "BLAKE2S_256"
    BLAKE2B_256 = "BLAKE2B_256"
    BLAKE2B_384 = "BLAKE2B_384"
    BLAKE2B_512 = "BLAKE2B_512"
    MD5 = "MD5"


_CONSTRUCTORS: Dict[Algorithm, Callable[..., Any]] = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA224: hashlib.sha224,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA384: hashlib.sha384,
    Algorithm.SHA512: hashlib.sha512,
    Algorithm.SHA3_224: hashlib.sha3_224,
    Algorithm.SHA3_256: hashlib.sha3_256,
    Algorithm.SHA3_384: hashlib.sha3_384,
    Algorithm.SHA3_512: hashlib.sha3_512,
    Algorithm.BLAKE2S_256: functools.partial(hashlib.blake2s, digest_size=32),
    Algorithm.BLAKE2B_256: functools.partial(hashlib.blake2b, digest_size=32),
    Algorithm.BLAKE2B_384: functools.partial(hashlib.blake2b, digest_size=48),
    Algorithm.BLAKE2B_512: functools.partial(hashlib.blake2b, digest_size=64),
    Algorithm.MD5: hashlib.md5,
}

DEFAULT_ALGORITHM = Algorithm.SHA1


def _squash(name: str) -> str:
    # "sha3-256", "SHA3_256" and "SHA3256" all squash to "SHA3256"
    return name.strip().upper().replace("-", "").replace("_", "")


_BY_NAME: Dict[str, Algorithm] = {_squash(a.value): a for a in Algorithm}


def lookup(value: Any) -> Optional[Algorithm]:
    """
    Resolve an algorithm given as an ``Algorithm`` member or as its name.

    Names are matched ignoring case, "-" and "_", so "sha256", "SHA-1",
    "SHA3-256" and "blake2b_512" all resolve.

    :param value: member or name to resolve
    :returns: the matching member, or None when unsupported
    """
    if isinstance(value, Algorithm):
        return value
    if not isinstance(value, str):
        return None
    return _BY_NAME.get(_squash(value))


def constructor(algorithm: Algorithm) -> Callable[..., Any]:
    return _CONSTRUCTORS[algorithm]


def digest_size(algorithm: Algorithm) -> int:
    """
    Size in bytes of the digests produced by ``algorithm``.
    """
    return constructor(algorithm)().digest_size


def new_hmac(algorithm: Algorithm, key: bytes, msg: Optional[bytes] = None) -> "hmac.HMAC":
    """
    Returns a fresh HMAC keyed with ``key`` over the selected hash.

    :param algorithm: hash function to build the HMAC on
    :param key: raw key bytes (already base32-decoded)
    :param msg: optional initial message
    """
    return hmac.new(key, msg, constructor(algorithm))
