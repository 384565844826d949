"""A 64-bit set of signal numbers."""

from __future__ import annotations

from dataclasses import dataclass

_WIDTH = 64
_MASK = (1 << _WIDTH) - 1


def _check_bit(kth: int) -> int:
    if not 0 <= kth < _WIDTH:
        raise ValueError(f"bit {kth} is outside a {_WIDTH}-bit signal set")
    return kth


@dataclass
class SignalSet:
    """Signals held as bits of a machine word."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= _MASK

    def reset(self, value: int) -> None:
        """Overwrite the whole set."""
        self.value = value & _MASK

    def clear(self) -> None:
        """Remove every signal."""
        self.value = 0

    def contains(self, kth: int) -> bool:
        """Whether bit ``kth`` is set."""
        return bool((self.value >> _check_bit(kth)) & 1)

    def add(self, kth: int) -> None:
        """Set bit ``kth``."""
        self.value |= 1 << _check_bit(kth)

    def remove(self, kth: int) -> None:
        """Clear bit ``kth``."""
        self.value &= ~(1 << _check_bit(kth)) & _MASK

    def union(self, other: SignalSet) -> None:
        """Add every signal of ``other``."""
        self.value |= other.value

    def difference(self, other: SignalSet) -> None:
        """Remove every signal of ``other``."""
        self.value &= ~other.value & _MASK

    def set_new(self, other: SignalSet) -> int:
        """Replace the set with ``other`` and return the old raw value."""
        old = self.value
        self.value = other.value
        return old

    def trailing_zeros(self) -> int:
        """Number of trailing zero bits; 64 for an empty set."""
        if self.value == 0:
            return _WIDTH
        return (self.value & -self.value).bit_length() - 1

    def find_first_one(self, mask: SignalSet) -> int | None:
        """The lowest set bit not blocked by ``mask``, or None."""
        remaining = SignalSet(self.value & ~mask.value)
        position = remaining.trailing_zeros()
        return None if position == _WIDTH else position