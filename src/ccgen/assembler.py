"""Build the backend command line and output filename for one combination.

Command layout, each part separated by a single space::

    <backend> [<formal>...] [-o <outfile>] [<arg>...]

Empty formal values contribute nothing.  The output filename is built only
when a base name is configured::

    <base>[_<informal>...][.<extension>]

Values are inserted verbatim; no quoting or escaping is done.
"""

from __future__ import annotations

from dataclasses import dataclass

from ccgen.buffer import BoundedBuffer, str_write
from ccgen.combinations import Combination
from ccgen.config import RunConfiguration


@dataclass(frozen=True)
class Invocation:
    """One fully assembled backend call."""

    command: str
    output_file: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"command": self.command, "output": self.output_file}


class Assembler:
    """Assembles invocations into two reusable bounded buffers.

    The buffers are reset at the start of every :meth:`assemble` call, so
    the result depends only on the combination and the run configuration.
    """

    def __init__(self, config: RunConfiguration) -> None:
        self.config = config
        self.cmd_buf = BoundedBuffer(config.limits.max_command_len)
        self.file_buf = BoundedBuffer(config.limits.max_filename_len)

    def output_file_name(self, combo: Combination) -> str | None:
        """Return ``<base>_<tag>...[.<ext>]``, or ``None`` without a base name."""
        cfg = self.config
        if cfg.output_base is None:
            return None

        buf = self.file_buf
        buf.reset()
        str_write(buf, "%s", cfg.output_base)
        for alt in combo.chosen():
            if alt.informal:
                str_write(buf, "_%s", alt.informal)
        if cfg.extension:
            str_write(buf, ".%s", cfg.extension)
        return buf.value

    def assemble(self, combo: Combination) -> Invocation:
        """Build the command string (and output filename) for *combo*.

        Raises:
            BufferOverflowError: the command or filename exceeds its capacity.
        """
        cfg = self.config
        outfile = self.output_file_name(combo)

        buf = self.cmd_buf
        buf.reset()
        str_write(buf, "%s", cfg.backend)
        for alt in combo.chosen():
            if alt.formal:
                str_write(buf, " %s", alt.formal)
        if outfile is not None:
            str_write(buf, " -o %s", outfile)
        for arg in cfg.arguments:
            str_write(buf, " %s", arg)

        return Invocation(command=buf.value, output_file=outfile)
