"""Per-mode digit usage rules for the cage search.

A standard cage uses every digit at most once and walks digits in strictly
increasing order. An overlapping cage spans several boxes, so a digit may
repeat up to ``MAX_DUPLICATE_USES`` times and the walk is non-decreasing.
"""

from contextlib import contextmanager
from enum import Enum

MAX_DUPLICATE_USES = 2


class Mode(Enum):
    STANDARD = "standard"
    OVERLAPPING = "overlapping"


class CagePolicy:

    def __init__(self, mode):
        self.mode = mode
        self.use_limit = MAX_DUPLICATE_USES if mode is Mode.OVERLAPPING else 1

    def next_start_digit(self, digit):
        # Overlapping cages may take the same digit again right away
        if self.mode is Mode.OVERLAPPING:
            return digit
        return digit + 1

    def can_use(self, digit, use_counts):
        return use_counts[digit - 1] < self.use_limit

    def on_use(self, digit, use_counts):
        use_counts[digit - 1] += 1

    def on_unuse(self, digit, use_counts):
        use_counts[digit - 1] -= 1

    @contextmanager
    def use(self, digit, use_counts):
        """Hold one use of ``digit`` for the duration of the block."""
        self.on_use(digit, use_counts)
        try:
            yield
        finally:
            self.on_unuse(digit, use_counts)

    def __repr__(self):
        return f"CagePolicy({self.mode.name}, limit={self.use_limit})"


_POLICIES = {mode: CagePolicy(mode) for mode in Mode}


def policy_for(mode):
    return _POLICIES[mode]
