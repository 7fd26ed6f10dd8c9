class OTPError(Exception):
    """
    Base class for every error raised by pytotp.
    """


class ConfigError(OTPError, ValueError):
    """
    The configuration cannot be used to build an engine.

    Only raised for non-secret fields when the resolver runs in strict mode.
    """


class SecretDecodeError(ConfigError):
    """
    The secret is empty or is not valid base32 text.
    """


class CodeFormatError(OTPError, ValueError):
    """
    A candidate code has the wrong length or contains non-digit characters.
    """


class TruncationError(OTPError, RuntimeError):
    """
    The HMAC digest is too short for the dynamic truncation window.
    """
