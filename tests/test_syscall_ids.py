import pytest

from tgkernel.syscall_ids import SyscallId, parse_syscall_header

HEADER = """\
/* system call numbers */
#define __NR_write 64
#define __NR_read 63
#define __NR_sched_yield 124
#ifndef FOO
#define OTHER 5
#define __NR_brk 0xd6
#endif
"""


def test_parse_collects_defines_in_upper_case():
    ids = parse_syscall_header(HEADER)
    assert set(ids) == {"WRITE", "READ", "SCHED_YIELD", "BRK"}


def test_parse_values():
    ids = parse_syscall_header(HEADER)
    assert ids["WRITE"] == SyscallId(64)
    assert ids["READ"] == SyscallId(63)
    assert ids["SCHED_YIELD"] == SyscallId(124)


def test_parse_hex_literal():
    ids = parse_syscall_header(HEADER)
    assert ids["BRK"] == SyscallId(0xD6)


def test_line_without_number_is_skipped():
    assert parse_syscall_header("#define __NR_lonely\n") == {}


def test_bad_number_raises():
    with pytest.raises(ValueError):
        parse_syscall_header("#define __NR_write __NR_other\n")


def test_syscall_id_int_round_trip():
    assert int(SyscallId(57)) == 57
    assert SyscallId(int(SyscallId(93))) == SyscallId(93)


def test_syscall_id_equality_and_hash():
    assert SyscallId(10) == SyscallId(10)
    assert len({SyscallId(10), SyscallId(10), SyscallId(11)}) == 2


def test_empty_text_gives_empty_table():
    assert parse_syscall_header("") == {}