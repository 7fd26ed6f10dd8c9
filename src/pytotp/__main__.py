"""
pytotp command line.

  # code for the current time
  PYTOTP_SECRET=JBSWY3DPEHPK3PXP pytotp generate

  # code at a fixed Unix time, with a non-default hash and width
  pytotp generate --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --digits 8 --time 59

  # exit status 0 when the code is accepted, 1 when it is not
  pytotp validate 287082 --secret JBSWY3DPEHPK3PXP --skew 1
"""

import argparse
import logging
import math
import os
import sys
from typing import List, Optional

from . import Config, digests, new
from .digests import Algorithm
from .exceptions import ConfigError

SECRET_ENV = "PYTOTP_SECRET"

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_CONFIG = 2


def _algorithm(value: str) -> Algorithm:
    algorithm = digests.lookup(value)
    if algorithm is None:
        raise argparse.ArgumentTypeError("unsupported algorithm {!r}".format(value))
    return algorithm


def _instant(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid Unix time {!r}".format(value))
    if not math.isfinite(seconds):
        raise argparse.ArgumentTypeError("Unix time must be finite, got {!r}".format(value))
    return seconds


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--secret",
        default=os.environ.get(SECRET_ENV, ""),
        help="base32 secret (default: ${})".format(SECRET_ENV),
    )
    common.add_argument(
        "--algorithm",
        default=Algorithm.SHA1,
        type=_algorithm,
        metavar="{{{}}}".format(",".join(a.value for a in Algorithm)),
        help="HMAC hash function (default: SHA1)",
    )
    common.add_argument("--digits", type=int, default=6, choices=(4, 5, 6, 8))
    common.add_argument("--period", type=int, default=30, help="seconds per code")
    common.add_argument("--time", type=_instant, default=None, help="Unix time to use instead of now")
    common.add_argument("--strict", action="store_true", help="reject invalid settings instead of using defaults")
    common.add_argument("--verbose", "-v", action="store_true")

    parser = argparse.ArgumentParser(prog="pytotp", description="RFC 6238 time-based one-time passwords")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("generate", parents=[common], help="print the code for a time")

    validate = sub.add_parser("validate", parents=[common], help="check a code")
    validate.add_argument("code")
    validate.add_argument("--skew", type=int, default=1, help="adjacent steps accepted (default: 1)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    config = Config(
        secret=args.secret,
        algorithm=args.algorithm,
        digits=args.digits,
        period=args.period,
        skew=getattr(args, "skew", 0),
    )
    try:
        totp = new(config, strict=args.strict)
    except ConfigError as e:
        print("pytotp: {}".format(e), file=sys.stderr)
        return EXIT_CONFIG

    for_time = args.time
    if args.command == "generate":
        if for_time is None:
            print(totp.generate())
            return EXIT_VALID
        try:
            code = totp.generate_for_time(for_time)
        except ValueError as e:
            print("pytotp: {}".format(e), file=sys.stderr)
            return EXIT_CONFIG
        print(code)
        return EXIT_VALID

    valid = totp.validate(args.code) if for_time is None else totp.validate_for_time(args.code, for_time)
    print("valid" if valid else "invalid")
    return EXIT_VALID if valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
