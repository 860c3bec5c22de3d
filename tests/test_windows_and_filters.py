from datetime import datetime

from apps.okrs.domain.entities import TimeWindow
from apps.okrs.domain.services.filters import filter_check_ins_in_window, filter_completed_tasks_in_window
from apps.okrs.domain.services.time_utils import start_of_day
from apps.okrs.domain.services.windows import get_annual_kr_window, get_quarter_target_window
from tests.conftest import utc


class TestAnnualKrWindow:
    def test_full_year_when_as_of_after_year_end(self, make_kr):
        window = get_annual_kr_window(make_kr(), 2026, utc(2027, 2, 1))

        assert window.start == utc(2026, 1, 1)
        assert start_of_day(window.end) == utc(2026, 12, 31)

    def test_end_capped_at_as_of(self, make_kr):
        as_of = utc(2026, 6, 15)
        window = get_annual_kr_window(make_kr(), 2026, as_of)

        assert window.end == as_of

    def test_always_starts_on_january_first(self, make_kr):
        window = get_annual_kr_window(make_kr(), 2026, utc(2026, 3, 15))
        assert window.start == utc(2026, 1, 1)


class TestQuarterTargetWindow:
    def test_reset_quarterly_uses_quarter_start(self, make_kr, make_quarter_target):
        kr = make_kr(aggregation='reset_quarterly')
        window = get_quarter_target_window(make_quarter_target(quarter=2), kr, 2026, utc(2026, 5, 15))

        assert window.start == utc(2026, 4, 1)
        assert window.end == utc(2026, 5, 15)

    def test_cumulative_starts_at_year_start(self, make_kr, make_quarter_target):
        kr = make_kr(aggregation='cumulative')
        window = get_quarter_target_window(make_quarter_target(quarter=2), kr, 2026, utc(2026, 5, 15))

        assert window.start == utc(2026, 1, 1)

    def test_end_capped_at_quarter_end(self, make_kr, make_quarter_target):
        window = get_quarter_target_window(make_quarter_target(quarter=1), make_kr(), 2026, utc(2026, 6, 15))
        assert start_of_day(window.end) == utc(2026, 3, 31)


class TestFilters:
    window = TimeWindow(start=utc(2026, 1, 1), end=utc(2026, 1, 31, 12))

    def test_bounds_are_inclusive(self, make_check_in):
        check_ins = [
            make_check_in(value=1, recorded_at=utc(2026, 1, 1)),
            make_check_in(value=2, recorded_at=utc(2026, 1, 31, 12)),
            make_check_in(value=3, recorded_at=utc(2026, 1, 31, 12, 0, 1)),
            make_check_in(value=4, recorded_at=utc(2025, 12, 31, 23, 59, 59)),
        ]

        result = filter_check_ins_in_window(check_ins, self.window)

        assert [ci.value for ci in result] == [1, 2]

    def test_string_timestamps_and_garbage(self, make_check_in):
        check_ins = [
            make_check_in(value=1, recorded_at='2026-01-15T10:00:00Z'),
            make_check_in(value=2, recorded_at='garbage'),
            make_check_in(value=3, recorded_at=None),
        ]

        result = filter_check_ins_in_window(check_ins, self.window)

        assert [ci.value for ci in result] == [1]

    def test_naive_window_is_treated_as_utc(self, make_check_in):
        window = TimeWindow(start=datetime(2026, 1, 1), end=datetime(2026, 1, 2))
        result = filter_check_ins_in_window([make_check_in(recorded_at='2026-01-01T06:00:00Z')], window)
        assert len(result) == 1

    def test_only_completed_tasks_with_completed_at(self, make_task):
        tasks = [
            make_task(id='t1', completed_at='2026-01-10T12:00:00Z'),
            make_task(id='t2', status='pending', completed_at=None),
            make_task(id='t3', status='completed', completed_at=None),
            make_task(id='t4', status='cancelled', completed_at='2026-01-10T12:00:00Z'),
            make_task(id='t5', completed_at='2026-02-10T12:00:00Z'),
        ]

        result = filter_completed_tasks_in_window(tasks, self.window)

        assert [t.id for t in result] == ['t1']

    def test_empty_input(self):
        assert filter_check_ins_in_window([], self.window) == []
        assert filter_completed_tasks_in_window([], self.window) == []
