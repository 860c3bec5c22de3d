import os
import sys
from datetime import datetime

import django
import pytest
import pytz

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'okr_planner.settings')
django.setup()

from apps.okrs.domain.entities import CheckIn, KeyResult, Objective, ProgressResult, PaceStatus, QuarterTarget, Task


def utc(*args):
    return datetime(*args, tzinfo=pytz.UTC)


@pytest.fixture
def make_kr():
    def _make(**overrides):
        data = dict(
            id='kr-1',
            objective_id='obj-1',
            name='Test KR',
            kr_type='metric',
            direction='increase',
            aggregation='cumulative',
            unit='units',
            start_value=0,
            target_value=100,
            current_value=50,
        )
        data.update(overrides)
        return KeyResult(**data)
    return _make


@pytest.fixture
def make_check_in():
    def _make(value=50, recorded_at='2026-06-15T12:00:00Z', **overrides):
        return CheckIn(value=value, recorded_at=recorded_at, annual_kr_id='kr-1', **overrides)
    return _make


@pytest.fixture
def make_task():
    def _make(status='completed', completed_at='2026-06-15T12:00:00Z', **overrides):
        return Task(status=status, completed_at=completed_at, annual_kr_id='kr-1', **overrides)
    return _make


@pytest.fixture
def make_quarter_target():
    def _make(quarter=1, target_value=25, **overrides):
        data = dict(id=f'qt-{quarter}', annual_kr_id='kr-1', current_value=0)
        data.update(overrides)
        return QuarterTarget(quarter=quarter, target_value=target_value, **data)
    return _make


@pytest.fixture
def objective():
    return Objective(id='obj-1', plan_id='plan-1', code='O1', name='Test Objective')


@pytest.fixture
def make_result():
    """Gotowy ProgressResult do testów rollupów."""
    def _make(progress=0.5, expected_progress=0.5, pace_status=PaceStatus.ON_TRACK):
        return ProgressResult(
            current_value=progress * 100,
            baseline=0,
            target=100,
            progress=progress,
            delta=progress * 100 - 100,
            expected_progress=expected_progress,
            expected_value=expected_progress * 100,
            pace_ratio=1.0,
            pace_status=pace_status,
            forecast_value=None,
            forecast_date=None,
            days_elapsed=0,
            days_remaining=0,
            last_observation_date=None,
        )
    return _make
