"""Bounded string builder.

A :class:`BoundedBuffer` accumulates text up to a fixed byte capacity that, as
with a C buffer, includes one slot for the terminating marker: at most
``capacity - 1`` bytes of content fit.  An append that would not fit
raises :class:`~ccgen.errors.BufferOverflowError` and leaves the buffer
unchanged; content is never silently truncated.
"""

from __future__ import annotations

from ccgen.errors import BufferOverflowError


class BoundedBuffer:
    """Append-only text buffer with overflow detection."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"Buffer capacity must be >= 1 (got {capacity})")
        self.capacity = capacity
        self._parts: list[str] = []
        self._length = 0

    @property
    def length(self) -> int:
        """Current end-of-content offset, in bytes as passed to the OS."""
        return self._length

    @property
    def value(self) -> str:
        return "".join(self._parts)

    def reset(self) -> None:
        """Drop all content so the buffer can be reused."""
        self._parts.clear()
        self._length = 0

    def append(self, text: str) -> int:
        """Write *text* at the current offset and return the new offset.

        Raises:
            BufferOverflowError: if *text* plus the terminator would exceed
                ``capacity``.
        """
        size = len(text.encode("utf-8", "surrogateescape"))
        needed = self._length + size + 1
        if needed > self.capacity:
            raise BufferOverflowError(self.capacity, needed)
        if text:
            self._parts.append(text)
            self._length += size
        return self._length

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"BoundedBuffer(capacity={self.capacity}, value={self.value!r})"


def str_write(buffer: BoundedBuffer, fmt: str, *args: object) -> int:
    """Format-append to *buffer*, printf style (``fmt % args``)."""
    text = fmt % args if args else fmt
    return buffer.append(text)
