"""System call numbers and the parser for the header that defines them."""

from __future__ import annotations

from dataclasses import dataclass

from tgkernel.ids import USIZE_MAX

_DEFINE_PREFIX = "#define __NR_"


@dataclass(frozen=True, order=True)
class SyscallId:
    """A system call number."""

    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value) & USIZE_MAX)

    def __int__(self) -> int:
        return self.value


def _parse_number(text: str) -> int:
    literal = text.strip()
    if not literal:
        raise ValueError("missing system call number")
    lowered = literal.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(literal, 0)
    return int(literal, 10)


def parse_syscall_header(text: str) -> dict[str, SyscallId]:
    """Read ``#define __NR_<name> <number>`` lines into upper-case names.

    Lines without that prefix, or without a space after the name, are
    skipped. A number that cannot be read raises ValueError.
    """
    ids: dict[str, SyscallId] = {}
    for line in text.splitlines():
        if not line.startswith(_DEFINE_PREFIX):
            continue
        rest = line[len(_DEFINE_PREFIX):]
        name, sep, number = rest.partition(" ")
        if not sep:
            continue
        try:
            value = _parse_number(number)
        except ValueError:
            raise ValueError(f"bad number for system call {name!r}: {number!r}") from None
        ids[name.upper()] = SyscallId(value)
    return ids