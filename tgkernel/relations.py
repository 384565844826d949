"""Parent/child and process/thread relationships."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from tgkernel.ids import ProcId, ThreadId

STILL_RUNNING = ProcId(-2)
"""Process id reported when the awaited child has not exited yet."""

RUNNING_EXIT_CODE = -1
THREAD_RUNNING = -2

_Id = TypeVar("_Id")


def _retire(live: list[_Id], dead: list[tuple[_Id, int]], ident: _Id, exit_code: int) -> None:
    try:
        idx = live.index(ident)
    except ValueError:
        return
    dead.append((live.pop(idx), exit_code))


def _take_dead(dead: list[tuple[_Id, int]], ident: _Id) -> tuple[_Id, int] | None:
    for idx, (entry, _) in enumerate(dead):
        if entry == ident:
            return dead.pop(idx)
    return None


def _wait_any(
    children: list[ProcId], dead_children: list[tuple[ProcId, int]]
) -> tuple[ProcId, int] | None:
    if dead_children:
        return dead_children.pop()
    if children:
        return (STILL_RUNNING, RUNNING_EXIT_CODE)
    return None


def _wait_one(
    children: list[ProcId], dead_children: list[tuple[ProcId, int]], child_pid: ProcId
) -> tuple[ProcId, int] | None:
    reaped = _take_dead(dead_children, child_pid)
    if reaped is not None:
        return reaped
    if child_pid in children:
        return (STILL_RUNNING, RUNNING_EXIT_CODE)
    return None


@dataclass
class ProcRel:
    """A process's parent, live children and exited children."""

    parent: ProcId
    children: list[ProcId] = field(default_factory=list)
    dead_children: list[tuple[ProcId, int]] = field(default_factory=list)

    def add_child(self, child_pid: ProcId) -> None:
        """Record a new child."""
        self.children.append(child_pid)

    def del_child(self, child_pid: ProcId, exit_code: int) -> None:
        """Move an exited child to the dead list, awaiting wait."""
        _retire(self.children, self.dead_children, child_pid, exit_code)

    def wait_any_child(self) -> tuple[ProcId, int] | None:
        """Reap the most recently exited child.

        Returns ``(STILL_RUNNING, -1)`` if children exist but none has exited,
        and None if there are no children at all.
        """
        return _wait_any(self.children, self.dead_children)

    def wait_child(self, child_pid: ProcId) -> tuple[ProcId, int] | None:
        """Reap a specific child, report it running, or None if unknown."""
        return _wait_one(self.children, self.dead_children, child_pid)


@dataclass
class ProcThreadRel:
    """Process relationships plus the threads belonging to the process."""

    parent: ProcId
    children: list[ProcId] = field(default_factory=list)
    dead_children: list[tuple[ProcId, int]] = field(default_factory=list)
    threads: list[ThreadId] = field(default_factory=list)
    dead_threads: list[tuple[ThreadId, int]] = field(default_factory=list)

    def add_child(self, child_pid: ProcId) -> None:
        """Record a new child."""
        self.children.append(child_pid)

    def del_child(self, child_pid: ProcId, exit_code: int) -> None:
        """Move an exited child to the dead list, awaiting wait."""
        _retire(self.children, self.dead_children, child_pid, exit_code)

    def wait_any_child(self) -> tuple[ProcId, int] | None:
        """Reap the most recently exited child, as in ``ProcRel``."""
        return _wait_any(self.children, self.dead_children)

    def wait_child(self, child_pid: ProcId) -> tuple[ProcId, int] | None:
        """Reap a specific child, report it running, or None if unknown."""
        return _wait_one(self.children, self.dead_children, child_pid)

    def add_thread(self, tid: ThreadId) -> None:
        """Record a new thread."""
        self.threads.append(tid)

    def del_thread(self, tid: ThreadId, exit_code: int) -> None:
        """Move an exited thread to the dead list."""
        _retire(self.threads, self.dead_threads, tid, exit_code)

    def wait_thread(self, thread_tid: ThreadId) -> int | None:
        """Exit code of an exited thread, -2 if running, None if unknown."""
        reaped = _take_dead(self.dead_threads, thread_tid)
        if reaped is not None:
            return reaped[1]
        if thread_tid in self.threads:
            return THREAD_RUNNING
        return None