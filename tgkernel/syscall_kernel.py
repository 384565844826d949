"""Kernel-side system call dispatch to registered service handlers.

Handlers are plain objects with methods named after the calls they serve
(``write``, ``fork``, ``mmap``...). Each method receives the caller followed
by the call's arguments, converted to their C types, and returns an int.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Sequence, Union

from tgkernel.ids import USIZE_MAX
from tgkernel.syscall_ids import SyscallId
from tgkernel.timespec import ClockId

_ARG_COUNT = 6


@dataclass(frozen=True)
class Caller:
    """Who issued a system call: resource owner (process) and flow (thread)."""

    entity: int
    flow: int


@dataclass(frozen=True)
class Done:
    """The call was served and returned ``value``."""

    value: int


@dataclass(frozen=True)
class Unsupported:
    """No handler serves the call ``id``."""

    id: SyscallId


SyscallResult = Union[Done, Unsupported]


class _Service(Enum):
    PROCESS = "process"
    IO = "io"
    MEMORY = "memory"
    SCHEDULING = "scheduling"
    CLOCK = "clock"
    SIGNAL = "signal"


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _isize(value: int) -> int:
    return _signed(value, 64)


def _i32(value: int) -> int:
    return _signed(value, 32)


def _u32(value: int) -> int:
    return value & 0xFFFF_FFFF


def _u8(value: int) -> int:
    return value & 0xFF


_Convert = Callable[[Sequence[int]], tuple]

_ROUTES: tuple[tuple[str, _Service, str, _Convert], ...] = (
    ("WRITE", _Service.IO, "write", lambda a: (a[0], a[1], a[2])),
    ("READ", _Service.IO, "read", lambda a: (a[0], a[1], a[2])),
    ("OPEN", _Service.IO, "open", lambda a: (_isize(a[0]), a[1], a[2], a[3])),
    ("CLOSE", _Service.IO, "close", lambda a: (a[0],)),
    (
        "LINKAT",
        _Service.IO,
        "linkat",
        lambda a: (_i32(a[0]), a[1], _i32(a[2]), a[3], _u32(a[4])),
    ),
    ("UNLINKAT", _Service.IO, "unlinkat", lambda a: (_i32(a[0]), a[1], _u32(a[2]))),
    ("READLINKAT", _Service.IO, "readlinkat", lambda a: (_i32(a[0]), a[1], a[2], a[3])),
    ("DUP", _Service.IO, "dup", lambda a: (a[0],)),
    ("FCNTL", _Service.IO, "fcntl", lambda a: (a[0], _i32(a[1]), a[2])),
    ("FSTAT", _Service.IO, "fstat", lambda a: (a[0], a[1])),
    ("EXIT", _Service.PROCESS, "exit", lambda a: (a[0],)),
    ("EXIT_GROUP", _Service.PROCESS, "exit_group", lambda a: (a[0],)),
    ("CLONE", _Service.PROCESS, "fork", lambda a: ()),
    ("EXECVE", _Service.PROCESS, "exec", lambda a: (a[0], a[1])),
    ("WAIT4", _Service.PROCESS, "wait", lambda a: (_isize(a[0]), a[1])),
    ("GETPID", _Service.PROCESS, "getpid", lambda a: ()),
    ("SET_TID_ADDRESS", _Service.PROCESS, "set_tid_address", lambda a: (a[0],)),
    ("SET_ROBUST_LIST", _Service.PROCESS, "set_robust_list", lambda a: (a[0], a[1])),
    ("CLOCK_GETTIME", _Service.CLOCK, "clock_gettime", lambda a: (ClockId(a[0]), a[1])),
    ("SCHED_YIELD", _Service.SCHEDULING, "sched_yield", lambda a: ()),
    ("NANOSLEEP", _Service.SCHEDULING, "nanosleep", lambda a: (a[0], a[1])),
    ("BRK", _Service.MEMORY, "brk", lambda a: (a[0],)),
    ("GETRANDOM", _Service.MEMORY, "getrandom", lambda a: (a[0], a[1], _u32(a[2]))),
    ("MPROTECT", _Service.MEMORY, "mprotect", lambda a: (a[0], a[1], _i32(a[2]))),
    ("MUNMAP", _Service.MEMORY, "munmap", lambda a: (a[0], a[1])),
    (
        "MMAP",
        _Service.MEMORY,
        "mmap",
        lambda a: (a[0], a[1], _i32(a[2]), _i32(a[3]), _i32(a[4]), a[5]),
    ),
    ("KILL", _Service.SIGNAL, "kill", lambda a: (_isize(a[0]), _u8(a[1]))),
    ("RT_SIGACTION", _Service.SIGNAL, "sigaction", lambda a: (_u8(a[0]), a[1], a[2])),
    ("RT_SIGPROCMASK", _Service.SIGNAL, "sigprocmask", lambda a: (a[0],)),
    ("RT_SIGRETURN", _Service.SIGNAL, "sigreturn", lambda a: ()),
    ("PIPE2", _Service.IO, "pipe", lambda a: (a[0],)),
    ("RT_SIGPENDING", _Service.SIGNAL, "rt_sigpending", lambda a: (a[0], a[1])),
    (
        "PRLIMIT64",
        _Service.PROCESS,
        "prlimit64",
        lambda a: (_isize(a[0]), _u32(a[1]), a[2], a[3]),
    ),
)


class SyscallDispatcher:
    """Routes system calls to the handler registered for their service.

    ``syscall_ids`` maps upper-case call names (as produced by
    ``parse_syscall_header``) to their numbers. Each service handler can be
    registered once; later registrations are ignored.
    """

    def __init__(self, syscall_ids: Mapping[str, SyscallId]) -> None:
        self._handlers: dict[_Service, Any] = {}
        self._routes: dict[SyscallId, tuple[_Service, str, _Convert]] = {}
        for name, service, method, convert in _ROUTES:
            sid = syscall_ids.get(name)
            if sid is not None:
                self._routes.setdefault(SyscallId(int(sid)), (service, method, convert))

    def _init(self, service: _Service, handler: Any) -> None:
        self._handlers.setdefault(service, handler)

    def init_process(self, process: Any) -> None:
        """Register the process service handler."""
        self._init(_Service.PROCESS, process)

    def init_io(self, io: Any) -> None:
        """Register the I/O service handler."""
        self._init(_Service.IO, io)

    def init_memory(self, memory: Any) -> None:
        """Register the memory service handler."""
        self._init(_Service.MEMORY, memory)

    def init_scheduling(self, scheduling: Any) -> None:
        """Register the scheduling service handler."""
        self._init(_Service.SCHEDULING, scheduling)

    def init_clock(self, clock: Any) -> None:
        """Register the clock service handler."""
        self._init(_Service.CLOCK, clock)

    def init_signal(self, signal: Any) -> None:
        """Register the signal service handler."""
        self._init(_Service.SIGNAL, signal)

    def handle(self, caller: Caller, id: SyscallId | int, args: Sequence[int]) -> SyscallResult:
        """Dispatch call ``id`` with its six raw argument words.

        Returns Unsupported when the call is unknown or its service has no
        handler. Raises NotImplementedError when the handler lacks the method
        and ValueError when ``args`` does not hold six words.
        """
        sid = id if isinstance(id, SyscallId) else SyscallId(id)
        if len(args) != _ARG_COUNT:
            raise ValueError(f"a system call takes {_ARG_COUNT} argument words, got {len(args)}")
        words = tuple(int(arg) & USIZE_MAX for arg in args)
        route = self._routes.get(sid)
        if route is None:
            return Unsupported(sid)
        service, method, convert = route
        handler = self._handlers.get(service)
        if handler is None:
            return Unsupported(sid)
        func = getattr(handler, method, None)
        if func is None:
            raise NotImplementedError(
                f"the {service.value} handler does not implement {method}"
            )
        return Done(int(func(caller, *convert(words))))