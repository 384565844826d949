"""Uniprocessor interior mutability with interrupt masking."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")
V = TypeVar("V")


@dataclass
class Sstatus:
    """The supervisor interrupt-enable state of the hart."""

    sie: bool = False


class IntrMaskingInfo:
    """Nested interrupt masking that restores the original enable state."""

    def __init__(self, sstatus: Sstatus | None = None) -> None:
        self.sstatus = sstatus if sstatus is not None else Sstatus()
        self.nested_level = 0
        self.sie_before_masking = False

    def enter(self) -> None:
        """Disable interrupts, remembering the state at the outermost level."""
        sie = self.sstatus.sie
        self.sstatus.sie = False
        if self.nested_level == 0:
            self.sie_before_masking = sie
        self.nested_level += 1

    def exit(self) -> None:
        """Leave one masking level; re-enable interrupts at the outermost."""
        if self.nested_level == 0:
            raise RuntimeError("interrupt masking exited more often than entered")
        self.nested_level -= 1
        if self.nested_level == 0 and self.sie_before_masking:
            self.sstatus.sie = True


SSTATUS = Sstatus()
INTR_MASKING_INFO = IntrMaskingInfo(SSTATUS)


class UPIntrFreeCell(Generic[T]):
    """Holds a value accessed exclusively with interrupts masked."""

    def __init__(self, value: T, masking: IntrMaskingInfo | None = None) -> None:
        self._value = value
        self._masking = masking if masking is not None else INTR_MASKING_INFO
        self._borrowed = False

    @contextmanager
    def exclusive_access(self) -> Iterator[T]:
        """Borrow the value; raises RuntimeError if it is already borrowed."""
        self._masking.enter()
        if self._borrowed:
            self._masking.exit()
            raise RuntimeError("value is already borrowed")
        self._borrowed = True
        try:
            yield self._value
        finally:
            self._borrowed = False
            self._masking.exit()

    def exclusive_session(self, func: Callable[[T], V]) -> V:
        """Run ``func`` on the borrowed value and return its result."""
        with self.exclusive_access() as inner:
            return func(inner)