import calendar
import datetime
import math
from hmac import compare_digest
from typing import Union

Instant = Union[int, float, datetime.datetime]

_DIGITS = frozenset("0123456789")


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))


def is_code(otp: object, digits: int) -> bool:
    """
    True when ``otp`` is a string of exactly ``digits`` ASCII decimal digits.

    str.isdigit() is not enough here: it accepts other scripts' digits
    such as "٣" and superscripts such as "²".
    """
    return isinstance(otp, str) and len(otp) == digits and all(c in _DIGITS for c in otp)


def to_timestamp(for_time: Instant) -> int:
    """
    Whole Unix seconds for an instant.

    Floats are floored. Naive datetimes are read as UTC.
    """
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo is None:
            return calendar.timegm(for_time.timetuple())
        return math.floor(for_time.timestamp())
    if isinstance(for_time, bool) or not isinstance(for_time, (int, float)):
        raise TypeError("for_time must be a number of seconds or a datetime, got {}".format(type(for_time).__name__))
    return math.floor(for_time)
