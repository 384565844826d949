"""Process manager: scheduling plus parent/child bookkeeping."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from tgkernel.ids import USIZE_MAX, ProcId
from tgkernel.relations import ProcRel

P = TypeVar("P")

INIT_PARENT = ProcId(USIZE_MAX)
"""Parent id given to the initial process."""


class PManager(Generic[P]):
    """Tracks processes, the running one and their relationships."""

    def __init__(self) -> None:
        self._rel_map: dict[ProcId, ProcRel] = {}
        self._manager: Any = None
        self._current: ProcId | None = None

    @property
    def _mgr(self) -> Any:
        if self._manager is None:
            raise RuntimeError("no process manager has been set")
        return self._manager

    def _current_id(self) -> ProcId:
        if self._current is None:
            raise RuntimeError("no process is currently running")
        return self._current

    def find_next(self) -> P | None:
        """Pick the next process to run and make it current."""
        manager = self._mgr
        pid = manager.fetch()
        if pid is None:
            return None
        task = manager.get(pid)
        if task is None:
            return None
        self._current = pid
        return task

    def set_manager(self, manager: Any) -> None:
        """Install the container/scheduler for processes."""
        self._manager = manager

    def make_current_suspend(self) -> None:
        """Put the current process back in the ready queue."""
        pid = self._current_id()
        self._mgr.add(pid)
        self._current = None

    def make_current_exited(self, exit_code: int) -> None:
        """Remove the current process; its children pass to process 0."""
        pid = self._current_id()
        self._mgr.delete(pid)
        try:
            rel = self._rel_map.pop(pid)
        except KeyError:
            raise KeyError(f"process {pid.value} has no relationship record") from None
        parent_rel = self._rel_map.get(rel.parent)
        if parent_rel is not None:
            parent_rel.del_child(pid, exit_code)
        init = ProcId(0)
        for child in rel.children:
            self._rel_map[child].parent = init
            self._rel_map[init].add_child(child)
        self._current = None

    def add(self, id: ProcId, task: P, parent: ProcId) -> None:
        """Add a ready process; ``parent`` must exist unless it is INIT_PARENT."""
        if parent.value != USIZE_MAX and parent not in self._rel_map:
            raise KeyError("Parent process must exist in rel_map")
        manager = self._mgr
        manager.insert(id, task)
        manager.add(id)
        if parent.value != USIZE_MAX:
            self._rel_map[parent].add_child(id)
        self._rel_map[id] = ProcRel(parent)

    def current(self) -> P | None:
        """The running process."""
        return self._mgr.get(self._current_id())

    def get_task(self, id: ProcId) -> P | None:
        """The process stored under ``id``."""
        return self._mgr.get(id)

    def wait(self, child_pid: ProcId) -> tuple[ProcId, int] | None:
        """Reap a child of the current process; USIZE_MAX means any child."""
        rel = self._rel_map[self._current_id()]
        if child_pid.value == USIZE_MAX:
            return rel.wait_any_child()
        return rel.wait_child(child_pid)