# reel_engine/domain/errors.py


class ConfigurationError(Exception):
    """
    Raised when the engine is built from an unusable configuration.
    Fatal at construction time, never raised mid-spin.
    """
    pass


class InvariantViolation(AssertionError):
    """
    Raised when a caller breaks an engine contract (e.g. a non-square grid
    handed to the win detector). A programming error, not a recoverable one.
    """
    pass
