import pytest

from apps.okrs.domain.entities import KrConfig
from apps.okrs.domain.services.progress import (
    compute_baseline,
    compute_delta,
    compute_milestone_progress_with_tasks,
    compute_progress,
)


class TestZeroRange:
    def test_increase(self):
        assert compute_progress('metric', 'increase', 100, 100, 100) == 1
        assert compute_progress('metric', 'increase', 99, 100, 100) == 0

    def test_decrease(self):
        assert compute_progress('metric', 'decrease', 20, 20, 20) == 1
        assert compute_progress('metric', 'decrease', 21, 20, 20) == 0


class TestIncreaseDecrease:
    def test_increase_is_clamped(self):
        assert compute_progress('metric', 'increase', 150, 0, 100) == 1
        assert compute_progress('metric', 'increase', -10, 0, 100) == 0

    def test_range_spanning_zero(self):
        assert compute_progress('metric', 'increase', 0, -50, 50) == 0.5

    def test_debt_reduction(self):
        assert compute_progress('metric', 'decrease', 60, 100, 20) == 0.5

    def test_negative_values_decrease(self):
        # z -200 do -1000
        assert compute_progress('metric', 'decrease', -600, -200, -1000) == 0.5

    @pytest.mark.parametrize('current,baseline,target', [
        (60, 100, 20),
        (10, 100, 20),
        (150, 100, 20),
        (-5, 10, -30),
        (3, 4, 0),
    ])
    def test_decrease_mirrors_increase(self, current, baseline, target):
        def flip(v):
            return baseline + target - v

        decrease = compute_progress('metric', 'decrease', current, baseline, target)
        increase = compute_progress('metric', 'increase', flip(current), flip(baseline), flip(target))

        assert decrease == pytest.approx(increase)


class TestMilestone:
    @pytest.mark.parametrize('value', [-1, 0, 0.5, 0.99, 1, 3])
    def test_binary(self, value):
        for direction in ('increase', 'decrease', 'maintain'):
            assert compute_progress('milestone', direction, value, 0, 1) in (0, 1)

    def test_complete_at_one(self):
        assert compute_progress('milestone', 'increase', 1, 0, 1) == 1
        assert compute_progress('milestone', 'decrease', 0.5, 0, 1) == 0


class TestMaintain:
    def test_on_target(self):
        assert compute_progress('metric', 'maintain', 100, 100, 100) == 1

    def test_default_tolerance_is_five_percent_of_target(self):
        assert compute_progress('metric', 'maintain', 102.5, 100, 100) == pytest.approx(0.5)
        assert compute_progress('metric', 'maintain', 95, 100, 100) == 0
        assert compute_progress('metric', 'maintain', 110, 100, 100) == 0

    def test_minimum_tolerance_for_small_targets(self):
        assert compute_progress('metric', 'maintain', 2.25, 2, 2) == pytest.approx(0.5)

    def test_custom_tolerance_band(self):
        config = KrConfig(tolerance_band=10)
        assert compute_progress('metric', 'maintain', 105, 100, 100, config) == pytest.approx(0.5)


class TestBaseline:
    def test_start_value(self, make_kr):
        assert compute_baseline(make_kr(start_value=10)) == 10
        assert compute_baseline(make_kr(start_value=0)) == 0

    def test_maintain_with_zero_start_uses_target(self, make_kr):
        assert compute_baseline(make_kr(direction='maintain', start_value=0, target_value=80)) == 80
        assert compute_baseline(make_kr(direction='maintain', start_value=5, target_value=80)) == 5


class TestDelta:
    def test_increase(self):
        assert compute_delta(60, 100, 'increase') == -40
        assert compute_delta(120, 100, 'increase') == 20

    def test_decrease(self):
        assert compute_delta(60, 20, 'decrease') == -40
        assert compute_delta(10, 20, 'decrease') == 10

    def test_at_target(self):
        assert compute_delta(20, 20, 'decrease') == 0
        assert compute_delta(100, 100, 'increase') == 0


class TestMilestoneWithTasks:
    def test_any_completed_task_count_completes_milestone(self):
        # current = liczba ukończonych zadań (2) >= 1, więc ratio 2/4 jest pomijane
        assert compute_milestone_progress_with_tasks(2, 2, 4, False) == 1

    def test_task_ratio(self):
        assert compute_milestone_progress_with_tasks(0, 2, 4, False) == 0.5

    def test_task_ratio_capped(self):
        assert compute_milestone_progress_with_tasks(0, 4, 4, False) == 0.95

    def test_explicit_completion(self):
        assert compute_milestone_progress_with_tasks(0, 0, 4, True) == 1

    def test_manual_partial_value_without_tasks(self):
        assert compute_milestone_progress_with_tasks(0.4, 0, 0, False) == 0.4
        assert compute_milestone_progress_with_tasks(0, 0, 0, False) == 0
