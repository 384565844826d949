import pytest

from tgkernel.cell import IntrMaskingInfo, Sstatus, UPIntrFreeCell


def test_enter_disables_and_exit_restores_enabled():
    status = Sstatus(sie=True)
    info = IntrMaskingInfo(status)
    info.enter()
    assert status.sie is False
    info.exit()
    assert status.sie is True
    assert info.nested_level == 0


def test_nested_masking_restores_only_at_outermost():
    status = Sstatus(sie=True)
    info = IntrMaskingInfo(status)
    info.enter()
    info.enter()
    assert info.nested_level == 2
    info.exit()
    assert status.sie is False
    info.exit()
    assert status.sie is True


def test_disabled_interrupts_stay_disabled():
    status = Sstatus(sie=False)
    info = IntrMaskingInfo(status)
    info.enter()
    info.exit()
    assert status.sie is False


def test_exit_without_enter_raises():
    info = IntrMaskingInfo(Sstatus())
    with pytest.raises(RuntimeError):
        info.exit()


def test_exclusive_access_masks_interrupts():
    status = Sstatus(sie=True)
    cell = UPIntrFreeCell([1], IntrMaskingInfo(status))
    with cell.exclusive_access() as inner:
        assert status.sie is False
        inner.append(2)
    assert status.sie is True
    assert cell.exclusive_session(list) == [1, 2]


def test_double_borrow_raises_and_keeps_state():
    status = Sstatus(sie=True)
    info = IntrMaskingInfo(status)
    cell = UPIntrFreeCell({}, info)
    with cell.exclusive_access():
        with pytest.raises(RuntimeError):
            with cell.exclusive_access():
                pass
        assert info.nested_level == 1
    assert info.nested_level == 0
    assert status.sie is True


def test_session_returns_function_result():
    cell = UPIntrFreeCell({"n": 1}, IntrMaskingInfo(Sstatus()))
    assert cell.exclusive_session(lambda d: d["n"] + 1) == 2


def test_borrow_released_after_exception():
    cell = UPIntrFreeCell([], IntrMaskingInfo(Sstatus()))
    with pytest.raises(KeyError):
        with cell.exclusive_access():
            raise KeyError("boom")
    assert cell.exclusive_session(len) == 0