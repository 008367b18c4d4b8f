"""Option model: alternatives, options and the ordered option set.

OptionAlternative: one value an option may take (formal + informal name)
Option:            ordered alternatives declared by one ``-o`` flag
OptionSet:         ordered options, in ``-o`` encounter order

Both containers enforce their configured maximum on insertion and raise
:class:`~ccgen.errors.CapacityExceededError` instead of dropping entries.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from ccgen.errors import CapacityExceededError

DEFAULT_MAX_OPTIONS = 100
DEFAULT_MAX_ALTERNATIVES = 10


@dataclass(frozen=True)
class OptionAlternative:
    """One possible value of an option.

    ``formal`` is copied verbatim into the backend command line (empty means
    it contributes nothing).  ``informal`` only feeds the output filename.
    """

    formal: str
    informal: str = ""


@dataclass
class Option:
    """An axis of variation: one alternative is chosen per combination."""

    alternatives: list[OptionAlternative] = field(default_factory=list)
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES

    def add(self, alternative: OptionAlternative) -> OptionAlternative:
        if len(self.alternatives) >= self.max_alternatives:
            raise CapacityExceededError("alternatives in one option", self.max_alternatives)
        self.alternatives.append(alternative)
        return alternative

    def __len__(self) -> int:
        return len(self.alternatives)

    def __getitem__(self, index: int) -> OptionAlternative:
        return self.alternatives[index]

    def __iter__(self) -> Iterator[OptionAlternative]:
        return iter(self.alternatives)


@dataclass
class OptionSet:
    """Options in declaration order; the first varies slowest."""

    options: list[Option] = field(default_factory=list)
    max_options: int = DEFAULT_MAX_OPTIONS

    def add(self, option: Option) -> Option:
        if len(self.options) >= self.max_options:
            raise CapacityExceededError("options", self.max_options)
        self.options.append(option)
        return option

    def sizes(self) -> list[int]:
        """Alternative count of each option, in order."""
        return [len(opt) for opt in self.options]

    def combination_count(self) -> int:
        """Number of combinations; 1 for an empty set."""
        return math.prod(self.sizes())

    def __len__(self) -> int:
        return len(self.options)

    def __getitem__(self, index: int) -> Option:
        return self.options[index]

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options)
