import logging
import time
from typing import Optional, Type

from . import utils
from .config import ResolvedConfig
from .exceptions import CodeFormatError
from .otp import MAX_COUNTER, MIN_COUNTER, OTP
from .pool import ResourcePool
from .utils import Instant

log = logging.getLogger(__name__)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.

    Build one with ``pytotp.new()`` and share it: an instance never changes
    after construction and may be used from several threads at once.
    """

    def __init__(self, config: ResolvedConfig, pool_cls: Type[ResourcePool] = ResourcePool) -> None:
        """
        :param config: resolved configuration
        :param pool_cls: pool type used for the scratch objects
        """
        self.period = config.period
        self.skew = config.skew
        super().__init__(config, pool_cls=pool_cls)

    def __repr__(self) -> str:
        return "<{} algorithm={} digits={} period={} skew={}>".format(
            type(self).__name__, self.config.algorithm.name, self.digits, self.period, self.skew
        )

    def timecode(self, for_time: Instant) -> int:
        """
        Time step for an instant: Unix seconds floor-divided by the period.
        """
        return utils.to_timestamp(for_time) // self.period

    def generate_for_time(self, for_time: Instant) -> str:
        """
        Code for the time step ``for_time`` falls in.

        :param for_time: Unix seconds or a datetime (naive datetimes are UTC)
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def generate(self) -> str:
        """
        Code for the current time.
        """
        return self.generate_for_time(time.time())

    def remaining(self, for_time: Optional[Instant] = None) -> int:
        """
        Seconds until the code current at ``for_time`` (default: now) rolls over.
        """
        if for_time is None:
            for_time = time.time()
        return self.period - utils.to_timestamp(for_time) % self.period

    def check_format(self, otp: str) -> None:
        """
        :raises CodeFormatError: if ``otp`` is not exactly ``digits`` decimal digits
        """
        if not utils.is_code(otp, self.digits):
            raise CodeFormatError("OTP must be exactly {} decimal digits".format(self.digits))

    def validate_for_time(self, otp: str, for_time: Instant) -> bool:
        """
        Verifies the OTP passed in against the codes of the time steps
        within ``skew`` steps of ``for_time``.

        Badly formed candidates are reported as invalid; use
        ``check_format`` to tell them apart from a mismatch.

        :param otp: the OTP to check against
        :param for_time: time to check the OTP at
        """
        try:
            self.check_format(otp)
        except CodeFormatError as e:
            log.debug("rejecting candidate: %s", e)
            return False

        base_step = self.timecode(for_time)
        for i in range(-self.skew, self.skew + 1):
            step = base_step + i
            # steps past the signed 64-bit counter range have no code
            if not MIN_COUNTER <= step <= MAX_COUNTER:
                continue
            expected = self.generate_for_time(step * self.period)
            if utils.strings_equal(otp, expected):
                return True
        return False

    def validate(self, otp: str) -> bool:
        """
        Verifies the OTP passed in against the current time.
        """
        return self.validate_for_time(otp, time.time())
