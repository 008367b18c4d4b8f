"""Parser for ``-o`` option specifications.

A specification is a comma-separated token list read in positional pairs::

    -g,debug,,release   ->  ("-g", "debug"), ("", "release")
    -m32,32,-m64,64     ->  ("-m32", "32"), ("-m64", "64")
    A,,B                ->  ("A", ""), ("B", "")

Even-indexed tokens (0-based) start a new alternative and become its formal
value; odd-indexed tokens become the informal tag of the alternative just
started.  Empty tokens are explicit empty strings.  Splitting follows POSIX
``getsubopt``: a single trailing comma ends the list without adding an empty
token, and ``=`` has no special meaning.
"""

from __future__ import annotations

from ccgen.errors import EmptyOptionError
from ccgen.options import (
    DEFAULT_MAX_ALTERNATIVES,
    DEFAULT_MAX_OPTIONS,
    Option,
    OptionAlternative,
    OptionSet,
)


def split_spec(spec: str) -> list[str]:
    """Split *spec* into tokens the way ``getsubopt`` consumes them."""
    if not spec:
        return []
    tokens = spec.split(",")
    if spec.endswith(","):
        tokens.pop()
    return tokens


def parse_option_spec(spec: str, max_alternatives: int = DEFAULT_MAX_ALTERNATIVES) -> Option:
    """Parse one ``-o`` specification into an :class:`Option`.

    Raises:
        EmptyOptionError: *spec* holds no tokens at all.
        CapacityExceededError: more than *max_alternatives* alternatives.
    """
    tokens = split_spec(spec)
    if not tokens:
        raise EmptyOptionError("Empty option specification")

    option = Option(max_alternatives=max_alternatives)
    for i in range(0, len(tokens), 2):
        informal = tokens[i + 1] if i + 1 < len(tokens) else ""
        option.add(OptionAlternative(formal=tokens[i], informal=informal))
    return option


def parse_option_specs(
    specs: list[str],
    *,
    max_options: int = DEFAULT_MAX_OPTIONS,
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
) -> OptionSet:
    """Parse every ``-o`` specification, in order, into an :class:`OptionSet`."""
    option_set = OptionSet(max_options=max_options)
    for spec in specs:
        option_set.add(parse_option_spec(spec, max_alternatives))
    return option_set
