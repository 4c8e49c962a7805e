class HSICubeError(Exception):
    """Base class for all errors raised by hsicube."""


class ConfigError(HSICubeError, ValueError):
    """Raised when a header/config source is unreadable, empty or malformed."""


class FormatError(ConfigError):
    """Raised for an unrecognised interleave or data type token."""


class RangeError(HSICubeError, ValueError):
    """Raised when a requested sub-cube does not fit the cube on disk."""


class CubeIOError(HSICubeError, OSError):
    """Raised when a data file cannot be opened, read or written."""


class BoundsError(HSICubeError, IndexError):
    """Raised for an element access outside the in-memory cube."""
