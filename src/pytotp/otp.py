import logging
import struct
from typing import Any, Optional, Type

from . import digests
from .config import ResolvedConfig
from .exceptions import TruncationError
from .pool import ResourcePool

log = logging.getLogger(__name__)

# Time steps travel as signed 64-bit big-endian integers
_COUNTER = struct.Struct(">q")
MIN_COUNTER = -(2**63)
MAX_COUNTER = 2**63 - 1

# The last nibble of the digest picks an offset of 0-15, and 4 bytes are read from there
_MIN_DIGEST_SIZE = 0x0F + 4


def dynamic_truncate(hmac_hash: bytes) -> int:
    """
    RFC 4226 dynamic truncation of an HMAC digest into a 31-bit integer.

    :raises TruncationError: if the digest ends before the 4-byte window does
    """
    offset = hmac_hash[-1] & 0x0F
    if offset + 4 > len(hmac_hash):
        raise TruncationError(
            "offset {} runs past the end of a {}-byte digest".format(offset, len(hmac_hash))
        )
    # offset = 10 in a SHA-1 digest -> bytes [10] [11] [12] [13]
    # 0x50 0xef 0x7f 0x19 -> 0x50ef7f19; & 0x7F on the first byte keeps the sign bit clear
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


class Scratch(object):
    """
    Per-call working state: the 8-byte counter buffer and a keyed HMAC.

    ``template`` is keyed once and never fed a message; each checkout gets a
    copy of it, so no digest state survives from one call to the next.
    """

    __slots__ = ("counter", "template", "mac")

    def __init__(self, template: Any) -> None:
        self.counter = bytearray(_COUNTER.size)
        self.template = template
        self.mac: Optional[Any] = None

    def reset(self) -> None:
        self.mac = self.template.copy()


class OTP(object):
    """
    Base class for OTP handlers.

    :param config: resolved configuration holding the decoded key
    :param pool_cls: pool type used for the scratch objects
    """

    def __init__(self, config: ResolvedConfig, pool_cls: Type[ResourcePool] = ResourcePool) -> None:
        self.config = config
        self.digits = config.digits
        self.modulus = 10**config.digits
        if digests.digest_size(config.algorithm) < _MIN_DIGEST_SIZE:
            log.warning(
                "%s digests are shorter than %d bytes; codes cannot be generated for some time steps",
                config.algorithm.name,
                _MIN_DIGEST_SIZE,
            )
        self._pool: ResourcePool[Scratch] = pool_cls(self._new_scratch, Scratch.reset)

    def _new_scratch(self) -> Scratch:
        return Scratch(digests.new_hmac(self.config.algorithm, self.config.key))

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the time step computed from a Unix timestamp
        """
        # Implements RFC 4226
        if not MIN_COUNTER <= input <= MAX_COUNTER:
            raise ValueError("input must fit in a signed 64-bit integer")
        with self._pool.borrowed() as scratch:
            _COUNTER.pack_into(scratch.counter, 0, input)
            scratch.mac.update(scratch.counter)
            hmac_hash = scratch.mac.digest()
            scratch.mac = None
        return self.format_code(dynamic_truncate(hmac_hash) % self.modulus)

    def format_code(self, code: int) -> str:
        # 10_000_000_000 + 81804 -> "10000081804"; the last 6 characters keep the leading zero
        str_code = str(10_000_000_000 + code)
        return str_code[-self.digits :]
