"""Register context of a thread as seen by the trap handler."""

from __future__ import annotations

from dataclasses import dataclass, field

_USIZE_MASK = (1 << 64) - 1
_REGISTER_COUNT = 31

PRIVILEGE_BIT = 1 << 8
INTERRUPT_BIT = 1 << 5
FS_BITS = 0b11 << 13


def _zero_registers() -> list[int]:
    return [0] * _REGISTER_COUNT


@dataclass
class LocalContext:
    """General-purpose registers x1..x31, the saved pc and switch flags."""

    registers: list[int] = field(default_factory=_zero_registers)
    pc: int = 0
    supervisor: bool = False
    interrupt: bool = False

    @classmethod
    def empty(cls) -> LocalContext:
        """A blank context."""
        return cls()

    @classmethod
    def user(cls, pc: int) -> LocalContext:
        """A user-mode context entering at ``pc`` with interrupts enabled."""
        return cls(pc=pc & _USIZE_MASK, supervisor=False, interrupt=True)

    @classmethod
    def thread(cls, pc: int, interrupt: bool) -> LocalContext:
        """A supervisor-mode context entering at ``pc``."""
        return cls(pc=pc & _USIZE_MASK, supervisor=True, interrupt=interrupt)

    @staticmethod
    def _slot(n: int) -> int:
        if not 1 <= n <= _REGISTER_COUNT:
            raise IndexError(f"register x{n} does not exist")
        return n - 1

    def x(self, n: int) -> int:
        """Read general-purpose register ``xn`` (1..31)."""
        return self.registers[self._slot(n)]

    def set_x(self, n: int, value: int) -> None:
        """Write general-purpose register ``xn`` (1..31)."""
        self.registers[self._slot(n)] = value & _USIZE_MASK

    def a(self, n: int) -> int:
        """Read argument register ``an``."""
        return self.x(n + 10)

    def set_a(self, n: int, value: int) -> None:
        """Write argument register ``an``."""
        self.set_x(n + 10, value)

    def ra(self) -> int:
        """The return address register."""
        return self.x(1)

    def sp(self) -> int:
        """The stack pointer."""
        return self.x(2)

    def set_sp(self, value: int) -> None:
        """Replace the stack pointer."""
        self.set_x(2, value)

    def move_next(self) -> None:
        """Advance pc past a non-compressed instruction."""
        self.pc = (self.pc + 4) & _USIZE_MASK

    def copy(self) -> LocalContext:
        """An independent copy of this context."""
        return LocalContext(
            registers=list(self.registers),
            pc=self.pc,
            supervisor=self.supervisor,
            interrupt=self.interrupt,
        )


def build_sstatus(sstatus: int, supervisor: bool, interrupt: bool) -> int:
    """Derive the sstatus value used to enter a context from the current one."""
    if supervisor:
        sstatus |= PRIVILEGE_BIT
    else:
        sstatus &= ~PRIVILEGE_BIT
    if interrupt:
        sstatus |= INTERRUPT_BIT
    else:
        sstatus &= ~INTERRUPT_BIT
    sstatus |= FS_BITS
    return sstatus & _USIZE_MASK