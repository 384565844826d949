from tgkernel.timespec import ClockId, TimeSpec


def test_clock_constants():
    assert ClockId.CLOCK_REALTIME == ClockId(0)
    assert ClockId.CLOCK_MONOTONIC.value == 1
    assert ClockId.CLOCK_TAI.value == 11


def test_clock_id_accepts_any_value():
    assert ClockId(1) == ClockId.CLOCK_MONOTONIC
    assert ClockId(99).value == 99


def test_from_millisecond_whole_seconds():
    assert TimeSpec.from_millisecond(1000) == TimeSpec.SECOND
    assert TimeSpec.from_millisecond(0) == TimeSpec.ZERO


def test_from_millisecond_one():
    assert TimeSpec.from_millisecond(1) == TimeSpec.MILLISECOND


def test_from_millisecond_consistent_with_addition():
    assert TimeSpec.from_millisecond(1001) == TimeSpec.SECOND + TimeSpec.MILLISECOND


def test_add_carries_nanoseconds():
    total = TimeSpec(1, 600_000_000) + TimeSpec(0, 600_000_000)
    assert total == TimeSpec(2, 200_000_000)


def test_add_exactly_one_second_of_nanos_is_not_carried():
    half = TimeSpec(0, 500_000_000)
    assert half + half == TimeSpec(0, 1_000_000_000)


def test_add_zero_is_identity():
    t = TimeSpec(7, 123)
    assert t + TimeSpec.ZERO == t


def test_ordering_of_converted_values():
    values = [TimeSpec.from_millisecond(ms) for ms in (2500, 0, 999, 1000, 1)]
    assert sorted(values) == [
        TimeSpec(0, 0),
        TimeSpec(0, 1_000_000),
        TimeSpec(0, 999_000_000),
        TimeSpec(1, 0),
        TimeSpec(2, 500_000_000),
    ]


def test_display_pads_nanoseconds():
    assert str(TimeSpec(3, 42)) == "TimeSpec(3.000000042)"