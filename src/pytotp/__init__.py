from typing import Optional, Type

from .config import DEFAULT_CONFIG as DEFAULT_CONFIG
from .config import Config as Config
from .config import ResolvedConfig as ResolvedConfig
from .config import normalize_config as normalize_config
from .config import resolve_config as resolve_config
from .digests import Algorithm as Algorithm
from .exceptions import CodeFormatError as CodeFormatError
from .exceptions import ConfigError as ConfigError
from .exceptions import OTPError as OTPError
from .exceptions import SecretDecodeError as SecretDecodeError
from .exceptions import TruncationError as TruncationError
from .otp import OTP as OTP
from .pool import ResourcePool as ResourcePool
from .totp import TOTP as TOTP


def new(config: Optional[Config] = None, strict: bool = False, pool_cls: Type[ResourcePool] = ResourcePool) -> TOTP:
    """
    Builds a TOTP engine.

    >>> totp = new(Config(secret="GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", digits=8, skew=0))
    >>> totp.generate_for_time(59)
    '94287082'

    :param config: settings; out-of-range fields fall back to their defaults
        unless ``strict`` is set
    :param strict: raise ConfigError instead of substituting defaults
    :param pool_cls: pool type for the engine's scratch objects
    :raises SecretDecodeError: if the secret is missing or not valid base32
    """
    return TOTP(resolve_config(config, strict=strict), pool_cls=pool_cls)
