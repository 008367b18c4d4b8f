"""Cartesian-product enumeration over an :class:`~ccgen.options.OptionSet`.

Combinations come out in lexicographic order of alternative indices, the
first declared option varying slowest, exactly like nested loops with the
first option outermost.  An empty option set yields one empty combination,
so a run without ``-o`` still performs a single backend invocation.
Nothing is deduplicated: combinations that assemble to identical commands
are each produced.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ccgen.options import OptionAlternative, OptionSet


@dataclass(frozen=True)
class Combination:
    """One chosen alternative index per option of *option_set*."""

    option_set: OptionSet
    indices: tuple[int, ...]

    def chosen(self) -> Iterator[OptionAlternative]:
        """Yield the chosen alternative of every option, in option order."""
        for option, index in zip(self.option_set, self.indices):
            yield option[index]


def iter_combinations(option_set: OptionSet) -> Iterator[Combination]:
    """Yield every combination of *option_set*, first option slowest."""
    ranges = [range(size) for size in option_set.sizes()]
    for indices in itertools.product(*ranges):
        yield Combination(option_set, indices)


def enumerate_combinations(
    option_set: OptionSet,
    on_combination: Callable[[Combination], object],
) -> int:
    """Call *on_combination* for each combination and return how many ran.

    Combinations are produced lazily and not retained; an exception from the
    callback stops the enumeration.
    """
    count = 0
    for combo in iter_combinations(option_set):
        on_combination(combo)
        count += 1
    return count
