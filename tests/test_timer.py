import pytest

from bulktasks import timer


def test_empty_input_defaults_to_one_nanosecond():
    assert timer.parse_seconds_per_tick([]) == 1e-9


def test_model_name_with_ghz():
    lines = ["processor\t: 0", "model name\t: Some CPU @ 2.00GHz"]
    assert timer.parse_seconds_per_tick(lines) == pytest.approx(1e-9 / 2.0)


def test_model_name_with_mhz():
    lines = ["model name\t: Old CPU @ 500MHz"]
    assert timer.parse_seconds_per_tick(lines) == pytest.approx(1e-6 / 500.0)


def test_cpu_mhz_line():
    lines = ["vendor_id\t: Generic", "cpu MHz\t\t: 1000.000"]
    assert timer.parse_seconds_per_tick(lines) == pytest.approx(1e-9)


def test_model_name_without_at_falls_through_to_cpu_mhz():
    lines = ["model name\t: Plain CPU", "cpu MHz : 250"]
    assert timer.parse_seconds_per_tick(lines) == pytest.approx(1e-6 / 250)


def test_first_matching_line_wins():
    lines = ["cpu MHz : 100", "model name : X @ 3GHz"]
    assert timer.parse_seconds_per_tick(lines) == pytest.approx(1e-6 / 100)


def test_unparsable_lines_keep_default():
    lines = ["model name : X @ fastGHz", "flags : fpu"]
    assert timer.parse_seconds_per_tick(lines) == 1e-9


def test_conversions_are_consistent():
    assert timer.ticks_per_second() * timer.seconds_per_tick() == pytest.approx(1.0)
    assert timer.ms_per_tick() == pytest.approx(timer.seconds_per_tick() * 1000.0)


def test_tick_units_are_nanoseconds():
    assert timer.tick_units() == "ns"


def test_clock_is_monotonic():
    first = timer.current_ticks()
    second = timer.current_ticks()
    assert second >= first
    a = timer.current_seconds()
    b = timer.current_seconds()
    assert b >= a