"""Identifiers of processes, threads and coroutines."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import ClassVar, Iterator

USIZE_MAX = (1 << 64) - 1


@dataclass(frozen=True, order=True)
class _TaskId:
    """A machine-word identifier; ids of different kinds never compare equal."""

    value: int

    _counter: ClassVar[Iterator[int]]
    _lock: ClassVar[threading.Lock]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._counter = itertools.count()
        cls._lock = threading.Lock()

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & USIZE_MAX)

    @classmethod
    def _allocate(cls):
        with cls._lock:
            return cls(next(cls._counter))

    def __int__(self) -> int:
        return self.value


class ProcId(_TaskId):
    """Process identifier."""

    @classmethod
    def new(cls) -> ProcId:
        """Allocate the next process id, counting from 0."""
        return cls._allocate()


class ThreadId(_TaskId):
    """Thread identifier."""

    @classmethod
    def new(cls) -> ThreadId:
        """Allocate the next thread id, counting from 0."""
        return cls._allocate()


class CoroId(_TaskId):
    """Coroutine identifier."""

    @classmethod
    def new(cls) -> CoroId:
        """Allocate the next coroutine id, counting from 0."""
        return cls._allocate()