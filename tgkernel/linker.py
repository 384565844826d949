"""Kernel linker scripts and the kernel's memory layout."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Iterator

from tgkernel.ids import USIZE_MAX

M_BASE_ADDRESS = "0x80000000"
S_BASE_ADDRESS = "0x80200000"

# (section, alignment, body lines) of the supervisor-mode kernel image.
_KERNEL_SECTIONS: tuple[tuple[str, str | None, tuple[str, ...]], ...] = (
    (".text", None, ("__start = .;", "*(.text.entry)", "*(.text .text.*)")),
    (".rodata", "4K", ("__rodata = .;", "*(.rodata .rodata.*)", "*(.srodata .srodata.*)")),
    (".data", "4K", ("__data = .;", "*(.data .data.*)", "*(.sdata .sdata.*)")),
    (
        ".bss",
        "8",
        ("__sbss = .;", "*(.bss .bss.*)", "*(.sbss .sbss.*)", "__ebss = .;"),
    ),
    (".boot", "4K", ("__boot = .;", "KEEP(*(.boot.stack))")),
)

_MACHINE_SECTIONS = (".text.m_entry", ".text.m_trap", ".bss.m_stack", ".bss.m_data")


def _block(name: str, body: tuple[str, ...], address: str = "", align: str | None = None) -> list[str]:
    placed = f" {address}" if address else ""
    aligned = f" ALIGN({align})" if align else ""
    return [f"    {name}{placed} :{aligned} {{", *(f"        {line}" for line in body), "    }"]


def _kernel_sections(text_address: str) -> list[str]:
    lines: list[str] = []
    for name, align, body in _KERNEL_SECTIONS:
        address = text_address if name == ".text" else ""
        lines.extend(_block(name, body, address, align))
    lines.append("    __end = .;")
    return lines


def _script() -> bytes:
    lines = ["OUTPUT_ARCH(riscv)", "SECTIONS {", *_kernel_sections(S_BASE_ADDRESS), "}"]
    return "\n".join(lines).encode()


def _nobios_script() -> bytes:
    lines = [
        "OUTPUT_ARCH(riscv)",
        "ENTRY(_m_start)",
        f"M_BASE_ADDRESS = {M_BASE_ADDRESS};",
        f"S_BASE_ADDRESS = {S_BASE_ADDRESS};",
        "",
        "SECTIONS {",
        "    . = M_BASE_ADDRESS;",
        "",
    ]
    for name in _MACHINE_SECTIONS:
        lines.extend(_block(name, (f"*({name})",)))
        lines.append("")
    lines.extend(["    . = S_BASE_ADDRESS;", "", *_kernel_sections(""), "}"])
    return "\n".join(lines).encode()


SCRIPT = _script()
"""Linker script for booting under a supervisor binary interface firmware."""

NOBIOS_SCRIPT = _nobios_script()
"""Linker script with a machine-mode entry at 0x80000000 and the kernel at 0x80200000."""


class KernelRegionTitle(Enum):
    """Names of the kernel's memory regions, valued by their display prefix."""

    TEXT = ".text ----> "
    RODATA = ".rodata --> "
    DATA = ".data ----> "
    BOOT = ".boot ----> "


class KernelRegion:
    """A named address range of the kernel image."""

    __slots__ = ("title", "range")

    def __init__(self, title: KernelRegionTitle, range: range) -> None:
        self.title = title
        self.range = range

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KernelRegion):
            return NotImplemented
        return (self.title, self.range) == (other.title, other.range)

    def __hash__(self) -> int:
        return hash((self.title, self.range))

    def __repr__(self) -> str:
        return f"KernelRegion(title={self.title!r}, range={self.range!r})"

    def __str__(self) -> str:
        return f"{self.title.value}{self.range.start:#10x}..{self.range.stop:#10x}"


class KernelLayout:
    """Addresses of the kernel image's section boundaries."""

    __slots__ = ("text", "rodata", "data", "sbss", "ebss", "boot", "_end")

    INIT: ClassVar[KernelLayout]

    def __init__(
        self, text: int, rodata: int, data: int, sbss: int, ebss: int, boot: int, end: int
    ) -> None:
        self.text = text
        self.rodata = rodata
        self.data = data
        self.sbss = sbss
        self.ebss = ebss
        self.boot = boot
        self._end = end

    def _fields(self) -> tuple[int, ...]:
        return (self.text, self.rodata, self.data, self.sbss, self.ebss, self.boot, self._end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KernelLayout):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        names = ("text", "rodata", "data", "sbss", "ebss", "boot", "end")
        inner = ", ".join(f"{n}={v:#x}" for n, v in zip(names, self._fields()))
        return f"KernelLayout({inner})"

    def start(self) -> int:
        """Start address of the kernel."""
        return self.text

    def end(self) -> int:
        """End address of the kernel."""
        return self._end

    def length(self) -> int:
        """Size of the static kernel image in bytes."""
        if self._end < self.text:
            raise ValueError("kernel end lies before its start")
        return self._end - self.text

    def regions(self) -> Iterator[KernelRegion]:
        """The text, rodata, data and boot regions, in that order."""
        yield KernelRegion(KernelRegionTitle.TEXT, range(self.text, self.rodata))
        yield KernelRegion(KernelRegionTitle.RODATA, range(self.rodata, self.data))
        yield KernelRegion(KernelRegionTitle.DATA, range(self.data, self.ebss))
        yield KernelRegion(KernelRegionTitle.BOOT, range(self.boot, self._end))


KernelLayout.INIT = KernelLayout(*([USIZE_MAX] * 7))