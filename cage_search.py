"""Combination search for a single killer sudoku cage.

Given a target sum, a number of free cells and the digits already ruled out,
``search`` lists every admissible combination of digits 1..9 in ascending
lexicographic order.
"""

import logging
from dataclasses import dataclass, field

from cage_policy import Mode, policy_for
from digit_mask import DigitMask

logger = logging.getLogger(__name__)

SPOT_LIMIT = 9


class MalformedRequest(ValueError):
    """A cage request that breaks its structural invariants."""


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


# ------------------------------------------------------
# Request
# ------------------------------------------------------
@dataclass(frozen=True)
class CageRequest:
    target_sum: int
    spot_count: int
    excluded: DigitMask = field(default_factory=DigitMask.empty)
    mode: Mode = Mode.STANDARD

    @classmethod
    def build(cls, target_sum, spot_count, excluded=(), overlapping=False):
        if not isinstance(excluded, DigitMask):
            excluded = DigitMask.of(excluded)
        mode = Mode.OVERLAPPING if overlapping else Mode.STANDARD
        return cls(target_sum, spot_count, excluded, mode)

    def validate(self):
        if not _is_int(self.target_sum) or self.target_sum < 0:
            raise MalformedRequest(f"target sum must be a non-negative integer, got {self.target_sum!r}")
        if not _is_int(self.spot_count) or not 0 <= self.spot_count <= SPOT_LIMIT:
            raise MalformedRequest(f"spot count must be between 0 and {SPOT_LIMIT}, got {self.spot_count!r}")
        if not isinstance(self.excluded, DigitMask):
            raise MalformedRequest(f"excluded digits must be a DigitMask, got {type(self.excluded).__name__}")
        if not isinstance(self.mode, Mode):
            raise MalformedRequest(f"unknown cage mode {self.mode!r}")
        return self


# ------------------------------------------------------
# Search state
# ------------------------------------------------------
class SearchPath:
    """Digits chosen so far plus their use counts; lives for one search only."""

    def __init__(self, target_sum):
        self.digits = []
        self.use_counts = [0] * 9
        self.remaining = target_sum

    @property
    def depth(self):
        return len(self.digits)

    def push(self, digit):
        self.digits.append(digit)
        self.remaining -= digit

    def pop(self):
        digit = self.digits.pop()
        self.remaining += digit
        return digit

    def snapshot(self):
        return tuple(self.digits)


# ------------------------------------------------------
# Search
# ------------------------------------------------------
def _walk(request, policy, path, start_digit):
    if path.remaining == 0 and path.depth == request.spot_count:
        logger.debug("[ACCEPT] %s", path.digits)
        yield path.snapshot()
        return

    if path.remaining < 0 or path.depth >= request.spot_count:
        return

    for digit in range(start_digit, 10):
        # digits only grow from here, nothing larger can fit
        if digit > path.remaining:
            return
        if request.excluded.contains(digit):
            continue
        if not policy.can_use(digit, path.use_counts):
            continue

        with policy.use(digit, path.use_counts):
            path.push(digit)
            try:
                yield from _walk(request, policy, path, policy.next_start_digit(digit))
            finally:
                path.pop()


def iter_combinations(request):
    """Yield each combination for ``request`` as a tuple of digits, in order."""
    request.validate()
    logger.info(
        "[REQUEST] sum=%d spots=%d excluded=%s mode=%s",
        request.target_sum, request.spot_count, request.excluded.digits(), request.mode.name,
    )
    path = SearchPath(request.target_sum)
    yield from _walk(request, policy_for(request.mode), path, 1)


def search(request):
    combos = list(iter_combinations(request))
    logger.info("[DONE] %d combination(s)", len(combos))
    return combos
