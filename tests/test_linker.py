import pytest

from tgkernel.ids import USIZE_MAX
from tgkernel.linker import (
    NOBIOS_SCRIPT,
    SCRIPT,
    KernelLayout,
    KernelRegion,
    KernelRegionTitle,
)


@pytest.fixture
def layout():
    return KernelLayout(
        text=0x80200000,
        rodata=0x80201000,
        data=0x80202000,
        sbss=0x80202100,
        ebss=0x80202200,
        boot=0x80203000,
        end=0x80207000,
    )


def test_init_is_all_max():
    init = KernelLayout.INIT
    assert init.start() == USIZE_MAX
    assert init.length() == 0


def test_region_display(layout):
    text = next(layout.regions())
    assert str(text) == ".text ----> 0x80200000..0x80201000"


def test_region_display_pads_small_addresses():
    region = KernelRegion(KernelRegionTitle.RODATA, range(0x1000, 0x2000))
    assert str(region) == ".rodata -->     0x1000..    0x2000"


def test_length_rejects_inverted_layout():
    bad = KernelLayout(10, 10, 10, 10, 10, 10, 5)
    with pytest.raises(ValueError):
        bad.length()


def test_scripts_define_entry_symbols():
    assert SCRIPT.startswith(b"OUTPUT_ARCH(riscv)")
    assert b".text 0x80200000" in SCRIPT
    assert b"ENTRY(_m_start)" in NOBIOS_SCRIPT
    for symbol in (b"__start", b"__rodata", b"__data", b"__sbss", b"__ebss", b"__boot", b"__end"):
        assert symbol in SCRIPT
        assert symbol in NOBIOS_SCRIPT