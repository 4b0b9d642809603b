"""Nine-bit digit sets for killer sudoku cages.

Digit ``d`` (1..9) lives in bit ``d - 1``, so ``0b000000101`` is ``{1, 3}``.
"""

DIGITS = range(1, 10)
ALL_MASK = 0b111111111


# ------------------------------------------------------
# Bit helpers
# ------------------------------------------------------
def mask_for_digit(d):
    return 1 << (d - 1)


def digits_from_mask(m):
    d = []
    i = 1
    while m:
        if m & 1:
            d.append(i)
        m >>= 1
        i += 1
    return d


def count_bits(m):
    return m.bit_count()


def is_digit(d):
    return isinstance(d, int) and not isinstance(d, bool) and 1 <= d <= 9


# ------------------------------------------------------
# DigitMask
# ------------------------------------------------------
class DigitMask:
    """Immutable set of sudoku digits backed by a 9-bit integer."""

    __slots__ = ("_bits",)

    def __init__(self, bits=0):
        self._bits = bits & ALL_MASK

    @classmethod
    def empty(cls):
        return cls(0)

    @classmethod
    def from_bits(cls, bits):
        return cls(bits)

    @classmethod
    def of(cls, digits):
        """Build a mask from an iterable of digits, ignoring anything outside 1..9."""
        bits = 0
        for d in digits:
            if is_digit(d):
                bits |= mask_for_digit(d)
        return cls(bits)

    @property
    def bits(self):
        return self._bits

    def contains(self, d):
        if not is_digit(d):
            return False
        return bool(self._bits & mask_for_digit(d))

    def with_digit(self, d):
        if not is_digit(d):
            return self
        return DigitMask(self._bits | mask_for_digit(d))

    def digits(self):
        return digits_from_mask(self._bits)

    def is_full(self):
        return self._bits == ALL_MASK

    def __contains__(self, d):
        return self.contains(d)

    def __iter__(self):
        return iter(self.digits())

    def __len__(self):
        return count_bits(self._bits)

    def __eq__(self, other):
        if not isinstance(other, DigitMask):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self):
        return hash(self._bits)

    def __repr__(self):
        return f"DigitMask({self.digits()})"
