import base64
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from . import digests
from .digests import Algorithm
from .exceptions import ConfigError, SecretDecodeError

log = logging.getLogger(__name__)

SUPPORTED_DIGITS = (4, 5, 6, 8)
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_SKEW = 1


@dataclass(frozen=True)
class Config:
    """
    Settings supplied by the caller.

    :param secret: shared secret in base32 format
    :param algorithm: hash function for the HMAC, an ``Algorithm`` or its name
    :param digits: number of digits in a code, one of 4, 5, 6 or 8
    :param period: seconds each code stays current
    :param skew: adjacent time steps accepted on either side during validation
    """

    secret: str = ""
    algorithm: Any = digests.DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    skew: int = DEFAULT_SKEW


DEFAULT_CONFIG = Config()


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Normalized settings an engine is built from. The key is the decoded secret.
    """

    algorithm: Algorithm
    digits: int
    period: int
    skew: int
    key: bytes = field(repr=False)

    def __post_init__(self) -> None:
        # built by hand as well as by resolve_config, so the invariants are checked here too
        problems: List[str] = []
        if not isinstance(self.algorithm, Algorithm):
            problems.append("algorithm must be an Algorithm, got {!r}".format(self.algorithm))
        if not _is_int(self.digits) or self.digits not in SUPPORTED_DIGITS:
            problems.append("digits must be one of {}, got {!r}".format(SUPPORTED_DIGITS, self.digits))
        if not _is_int(self.period) or self.period <= 0:
            problems.append("period must be a positive integer, got {!r}".format(self.period))
        if not _is_int(self.skew) or self.skew < 0:
            problems.append("skew must be a non-negative integer, got {!r}".format(self.skew))
        if not isinstance(self.key, bytes) or not self.key:
            problems.append("key must be non-empty bytes")
        if problems:
            raise ConfigError("; ".join(problems))


def _is_int(value: Any) -> bool:
    # bool is an int subclass but True/False are never meant as a digit count
    return isinstance(value, int) and not isinstance(value, bool)


def decode_secret(secret: str) -> bytes:
    """
    Base32-decodes a secret, restoring any missing "=" padding.

    :raises SecretDecodeError: if the secret is empty or not valid base32
    """
    if not isinstance(secret, str):
        raise SecretDecodeError("secret must be base32 text, got {}".format(type(secret).__name__))
    secret = "".join(secret.split())
    if not secret:
        raise SecretDecodeError("secret must not be empty")
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        key = base64.b32decode(secret, casefold=True)
    except ValueError as e:
        raise SecretDecodeError("failed to decode base32 secret: {}".format(e)) from e
    if not key:
        raise SecretDecodeError("secret decodes to an empty key")
    return key


def normalize_config(config: Optional[Config] = None, strict: bool = False) -> Config:
    """
    Validates the non-secret fields of a configuration and fills in defaults.

    Invalid fields are replaced by their defaults without telling the caller,
    unless ``strict`` is set, in which case a single ConfigError naming every
    invalid field is raised. The secret is passed through untouched.

    :param config: caller settings; defaults are used when omitted
    :param strict: reject invalid fields instead of substituting defaults
    :returns: a Config whose algorithm is always an ``Algorithm`` member
    """
    if config is None:
        return DEFAULT_CONFIG

    problems: List[str] = []

    algorithm = digests.lookup(config.algorithm)
    if algorithm is None:
        problems.append("unsupported algorithm {!r}".format(config.algorithm))
        algorithm = digests.DEFAULT_ALGORITHM

    digits = config.digits
    if not _is_int(digits) or digits not in SUPPORTED_DIGITS:
        problems.append("digits must be one of {}, got {!r}".format(SUPPORTED_DIGITS, digits))
        digits = DEFAULT_DIGITS

    period = config.period
    if not _is_int(period) or period <= 0:
        problems.append("period must be a positive integer, got {!r}".format(period))
        period = DEFAULT_PERIOD

    skew = config.skew
    if not _is_int(skew) or skew < 0:
        problems.append("skew must be a non-negative integer, got {!r}".format(skew))
        skew = DEFAULT_SKEW

    if problems:
        if strict:
            raise ConfigError("; ".join(problems))
        for problem in problems:
            log.debug("substituting default: %s", problem)

    return Config(secret=config.secret, algorithm=algorithm, digits=digits, period=period, skew=skew)


def resolve_config(config: Optional[Config] = None, strict: bool = False) -> ResolvedConfig:
    """
    Normalizes a configuration and decodes its secret.

    :param config: caller settings
    :param strict: reject invalid fields instead of substituting defaults
    :raises SecretDecodeError: if the secret is missing or not valid base32
    """
    config = normalize_config(config, strict=strict)
    return ResolvedConfig(
        algorithm=config.algorithm,
        digits=config.digits,
        period=config.period,
        skew=config.skew,
        key=decode_secret(config.secret),
    )
