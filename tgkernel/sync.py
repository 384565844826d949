"""Blocking mutex, semaphore and condition variable for kernel threads.

These primitives never block by themselves: they report whether the caller
must be blocked and which thread, if any, the scheduler should wake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field

from tgkernel.cell import UPIntrFreeCell
from tgkernel.ids import ThreadId


class Mutex(ABC):
    """A lock acquired on behalf of a thread."""

    @abstractmethod
    def lock(self, tid: ThreadId) -> bool:
        """Try to acquire; False means the thread must be blocked."""

    @abstractmethod
    def unlock(self) -> ThreadId | None:
        """Release, returning a waiting thread to wake, if any."""


@dataclass
class _MutexState:
    locked: bool = False
    wait_queue: deque[ThreadId] = field(default_factory=deque)


class MutexBlocking(Mutex):
    """A mutex that queues waiting threads and hands the lock over in order."""

    def __init__(self) -> None:
        self.inner = UPIntrFreeCell(_MutexState())

    @property
    def locked(self) -> bool:
        return self.inner.exclusive_session(lambda state: state.locked)

    def lock(self, tid: ThreadId) -> bool:
        with self.inner.exclusive_access() as state:
            if state.locked:
                state.wait_queue.append(tid)
                return False
            state.locked = True
            return True

    def unlock(self) -> ThreadId | None:
        """Release; a woken waiter takes over the lock, which stays held."""
        with self.inner.exclusive_access() as state:
            if not state.locked:
                raise RuntimeError("unlocking a mutex that is not locked")
            if state.wait_queue:
                return state.wait_queue.popleft()
            state.locked = False
            return None


@dataclass
class _SemaphoreState:
    count: int
    wait_queue: deque[ThreadId] = field(default_factory=deque)


class Semaphore:
    """A counting semaphore with a FIFO wait queue."""

    def __init__(self, res_count: int) -> None:
        self.inner = UPIntrFreeCell(_SemaphoreState(res_count))

    @property
    def count(self) -> int:
        return self.inner.exclusive_session(lambda state: state.count)

    def up(self) -> ThreadId | None:
        """Release one resource, returning a waiting thread to wake."""
        with self.inner.exclusive_access() as state:
            state.count += 1
            return state.wait_queue.popleft() if state.wait_queue else None

    def down(self, tid: ThreadId) -> bool:
        """Take one resource; False means the thread must be blocked."""
        with self.inner.exclusive_access() as state:
            state.count -= 1
            if state.count < 0:
                state.wait_queue.append(tid)
                return False
            return True


@dataclass
class _CondvarState:
    wait_queue: deque[ThreadId] = field(default_factory=deque)


class Condvar:
    """A condition variable with a FIFO wait queue."""

    def __init__(self) -> None:
        self.inner = UPIntrFreeCell(_CondvarState())

    def signal(self) -> ThreadId | None:
        """Return one waiting thread to wake, if any."""
        with self.inner.exclusive_access() as state:
            return state.wait_queue.popleft() if state.wait_queue else None

    def wait_no_sched(self, tid: ThreadId) -> bool:
        """Queue ``tid``; always False, meaning the thread must be blocked."""
        self.inner.exclusive_session(lambda state: state.wait_queue.append(tid))
        return False

    def wait_with_mutex(self, tid: ThreadId, mutex: Mutex) -> tuple[bool, ThreadId]:
        """Release ``mutex`` to a waiter, then try to reacquire it for ``tid``.

        Returns whether ``tid`` got the mutex and the thread that was woken.
        Raises RuntimeError if no thread was waiting on the mutex.
        """
        waking_tid = mutex.unlock()
        if waking_tid is None:
            raise RuntimeError("no thread was waiting on the mutex")
        return mutex.lock(tid), waking_tid