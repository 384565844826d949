"""Thread manager: schedules threads and tracks their processes."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from tgkernel.ids import USIZE_MAX, ProcId, ThreadId
from tgkernel.relations import ProcThreadRel

P = TypeVar("P")
T = TypeVar("T")


class PThreadManager(Generic[P, T]):
    """Tracks processes, their threads and the running thread."""

    def __init__(self) -> None:
        self._rel_map: dict[ProcId, ProcThreadRel] = {}
        self._proc_manager: Any = None
        self._tid2pid: dict[ThreadId, ProcId] = {}
        self._manager: Any = None
        self._current: ThreadId | None = None

    @property
    def _mgr(self) -> Any:
        if self._manager is None:
            raise RuntimeError("no thread manager has been set")
        return self._manager

    @property
    def _pmgr(self) -> Any:
        if self._proc_manager is None:
            raise RuntimeError("no process manager has been set")
        return self._proc_manager

    def _current_id(self) -> ThreadId:
        if self._current is None:
            raise RuntimeError("no thread is currently running")
        return self._current

    def _current_rel(self) -> ProcThreadRel:
        pid = self._tid2pid[self._current_id()]
        return self._rel_map[pid]

    def find_next(self) -> T | None:
        """Pick the next thread to run and make it current."""
        manager = self._mgr
        tid = manager.fetch()
        if tid is None:
            return None
        task = manager.get(tid)
        if task is None:
            return None
        self._current = tid
        return task

    def set_manager(self, manager: Any) -> None:
        """Install the container/scheduler for threads."""
        self._manager = manager

    def set_proc_manager(self, proc_manager: Any) -> None:
        """Install the container for processes."""
        self._proc_manager = proc_manager

    def make_current_suspend(self) -> None:
        """Put the current thread, if any, back in the ready queue."""
        if self._current is not None:
            self._mgr.add(self._current)
            self._current = None

    def make_current_exited(self, exit_code: int) -> None:
        """End the current thread; its process ends with its last thread."""
        tid = self._current
        if tid is None:
            return
        self._mgr.delete(tid)
        pid = self._tid2pid.pop(tid)
        rel = self._rel_map.get(pid)
        if rel is not None:
            rel.del_thread(tid, exit_code)
            if not rel.threads:
                self.del_proc(pid, exit_code)
        self._current = None

    def make_current_blocked(self) -> None:
        """Stop running the current thread without requeueing it."""
        self._current = None

    def re_enque(self, id: ThreadId) -> None:
        """Put a thread back in the ready queue."""
        self._mgr.add(id)

    def add(self, id: ThreadId, task: T, pid: ProcId) -> None:
        """Add a ready thread belonging to process ``pid``."""
        manager = self._mgr
        manager.insert(id, task)
        manager.add(id)
        rel = self._rel_map.get(pid)
        if rel is not None:
            rel.add_thread(id)
            self._tid2pid[id] = pid

    def current(self) -> T | None:
        """The running thread."""
        return self._mgr.get(self._current_id())

    def get_task(self, id: ThreadId) -> T | None:
        """The thread stored under ``id``."""
        return self._mgr.get(id)

    def add_proc(self, id: ProcId, proc: P, parent: ProcId) -> None:
        """Add a process under ``parent``."""
        self._pmgr.insert(id, proc)
        parent_rel = self._rel_map.get(parent)
        if parent_rel is not None:
            parent_rel.add_child(id)
        self._rel_map[id] = ProcThreadRel(parent)

    def get_proc(self, id: ProcId) -> P | None:
        """The process stored under ``id``."""
        return self._pmgr.get(id)

    def del_proc(self, id: ProcId, exit_code: int) -> None:
        """Remove a process; its children pass to process 0."""
        self._pmgr.delete(id)
        try:
            rel = self._rel_map.pop(id)
        except KeyError:
            raise KeyError(f"process {id.value} has no relationship record") from None
        parent_rel = self._rel_map.get(rel.parent)
        if parent_rel is not None:
            parent_rel.del_child(id, exit_code)
        init = ProcId(0)
        for child in rel.children:
            self._rel_map[child].parent = init
            self._rel_map[init].add_child(child)

    def wait(self, child_pid: ProcId) -> tuple[ProcId, int] | None:
        """Reap a child of the current process; USIZE_MAX means any child."""
        rel = self._current_rel()
        if child_pid.value == USIZE_MAX:
            return rel.wait_any_child()
        return rel.wait_child(child_pid)

    def waittid(self, thread_tid: ThreadId) -> int | None:
        """Wait for a thread of the current process."""
        return self._current_rel().wait_thread(thread_tid)

    def thread_count(self, id: ProcId) -> int:
        """Number of live threads of process ``id``."""
        return len(self._rel_map[id].threads)

    def get_thread(self, id: ProcId) -> list[ThreadId] | None:
        """Live threads of process ``id``, or None if it is unknown."""
        rel = self._rel_map.get(id)
        return None if rel is None else list(rel.threads)

    def get_current_proc(self) -> P | None:
        """The process owning the current thread."""
        if self._current is None:
            return None
        return self._pmgr.get(self._tid2pid[self._current])