"""Exception hierarchy for ccgen.

Every error is fatal for the run: library code raises, and the CLI entry
point turns the exception into an ``error:`` line and a nonzero exit.
Invocations already dispatched before the error are not rolled back.
"""


class CcgenError(Exception):
    """Base class for all ccgen errors."""


class BufferOverflowError(CcgenError):
    """An assembled command or filename did not fit its bounded buffer."""

    def __init__(self, capacity: int, needed: int) -> None:
        super().__init__(
            f"Attempt to buffer overflow encountered "
            f"(needed {needed} bytes, capacity {capacity})"
        )
        self.capacity = capacity
        self.needed = needed


class CapacityExceededError(CcgenError):
    """More options, alternatives or arguments than the configured maximum."""

    def __init__(self, what: str, limit: int) -> None:
        super().__init__(f"Too many {what} (maximum is {limit})")
        self.what = what
        self.limit = limit


class EmptyOptionError(CcgenError):
    """An option specification produced no alternatives."""


class ConfigError(CcgenError):
    """``ccgen.toml`` could not be read or holds a bad value."""
