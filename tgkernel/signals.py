"""Per-process signal bookkeeping and delivery."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum, auto

from tgkernel.context import LocalContext
from tgkernel.signal_defs import MAX_SIG, SignalAction, SignalNo
from tgkernel.signal_set import SignalSet


class SignalResultKind(Enum):
    """What handling pending signals led to."""

    NO_SIGNAL = auto()
    IS_HANDLING_SIGNAL = auto()
    IGNORED = auto()
    HANDLED = auto()
    PROCESS_KILLED = auto()
    PROCESS_SUSPENDED = auto()


@dataclass(frozen=True)
class SignalResult:
    """Outcome of signal handling; ``exit_code`` is set only when killed."""

    kind: SignalResultKind
    exit_code: int | None = None


def default_action(signal_no: SignalNo) -> SignalResult:
    """The result of a signal that has no user handler."""
    if signal_no in (SignalNo.SIGCHLD, SignalNo.SIGURG):
        return SignalResult(SignalResultKind.IGNORED)
    return SignalResult(SignalResultKind.PROCESS_KILLED, -int(signal_no))


class Signal(ABC):
    """The interface a process's signal module exposes to the kernel."""

    @abstractmethod
    def from_fork(self) -> Signal:
        """A module for a forked child: inherits handlers and mask."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all handlers, as exec does."""

    @abstractmethod
    def add_signal(self, signal: SignalNo) -> None:
        """Record a received signal."""

    @abstractmethod
    def is_handling_signal(self) -> bool:
        """Whether a signal is currently being handled."""

    @abstractmethod
    def set_action(self, signum: SignalNo, action: SignalAction) -> bool:
        """Install a handler; False means the request is invalid."""

    @abstractmethod
    def get_action(self, signum: SignalNo) -> SignalAction | None:
        """The installed handler; None means the request is invalid."""

    @abstractmethod
    def update_mask(self, mask: int) -> int:
        """Replace the mask and return the old one."""

    @abstractmethod
    def handle_signals(self, current_context: LocalContext) -> SignalResult:
        """Deliver at most one pending signal."""

    @abstractmethod
    def sig_return(self, current_context: LocalContext) -> bool:
        """Return from a user handler; False if none is running."""


class _Frozen:
    """Marker for a process stopped by SIGSTOP."""


_FROZEN = _Frozen()


class SignalImpl(Signal):
    """Signal state of one process."""

    def __init__(self) -> None:
        self.received = SignalSet()
        self.mask = SignalSet()
        self._handling: LocalContext | _Frozen | None = None
        self.actions: list[SignalAction | None] = [None] * (MAX_SIG + 1)

    def _fetch_signal(self) -> SignalNo | None:
        num = self.received.find_first_one(self.mask)
        if num is None:
            return None
        self.received.remove(num)
        return SignalNo.from_number(num)

    def _fetch_and_remove(self, signal_no: SignalNo) -> bool:
        num = int(signal_no)
        if self.received.contains(num) and not self.mask.contains(num):
            self.received.remove(num)
            return True
        return False

    def from_fork(self) -> SignalImpl:
        child = SignalImpl()
        child.mask = SignalSet(self.mask.value)
        child.actions = list(self.actions)
        return child

    def clear(self) -> None:
        self.actions = [None] * (MAX_SIG + 1)

    def add_signal(self, signal: SignalNo) -> None:
        self.received.add(int(signal))

    def is_handling_signal(self) -> bool:
        return self._handling is not None

    def set_action(self, signum: SignalNo, action: SignalAction) -> bool:
        if signum in (SignalNo.SIGKILL, SignalNo.SIGSTOP):
            return False
        self.actions[int(signum)] = action
        return True

    def get_action(self, signum: SignalNo) -> SignalAction | None:
        if signum in (SignalNo.SIGKILL, SignalNo.SIGSTOP):
            return None
        action = self.actions[int(signum)]
        return action if action is not None else SignalAction()

    def update_mask(self, mask: int) -> int:
        return self.mask.set_new(SignalSet(mask))

    def handle_signals(self, current_context: LocalContext) -> SignalResult:
        if self._handling is not None:
            if isinstance(self._handling, _Frozen):
                if self._fetch_and_remove(SignalNo.SIGCONT):
                    self._handling = None
                    return SignalResult(SignalResultKind.HANDLED)
                return SignalResult(SignalResultKind.PROCESS_SUSPENDED)
            return SignalResult(SignalResultKind.IS_HANDLING_SIGNAL)

        signal = self._fetch_signal()
        if signal is None:
            return SignalResult(SignalResultKind.NO_SIGNAL)
        if signal is SignalNo.SIGKILL:
            return SignalResult(SignalResultKind.PROCESS_KILLED, -int(signal))
        if signal is SignalNo.SIGSTOP:
            self._handling = _FROZEN
            return SignalResult(SignalResultKind.PROCESS_SUSPENDED)

        action = self.actions[int(signal)]
        if action is None:
            return default_action(signal)
        self._handling = current_context.copy()
        current_context.pc = action.handler
        current_context.set_a(0, int(signal))
        return SignalResult(SignalResultKind.HANDLED)

    def sig_return(self, current_context: LocalContext) -> bool:
        saved = self._handling
        if not isinstance(saved, LocalContext):
            return False
        self._handling = None
        for f in fields(saved):
            setattr(current_context, f.name, getattr(saved, f.name))
        return True