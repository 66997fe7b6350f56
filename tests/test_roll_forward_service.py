# tests/test_roll_forward_service.py
"""Unit tests for rolling a series forward after an occurrence is completed."""

import pytest
from datetime import timedelta

from compliance_scheduler.errors import ScheduleNotFound, ValidationError
from compliance_scheduler.services.roll_forward_service import roll_forward_series
from conftest import TENANT_A, TENANT_B, TODAY, make_schedule, series_dates


class TestRollForwardSeries:
    @pytest.mark.asyncio
    async def test_last_occurrence_completed_creates_next_year(self, store):
        done = store.insert_schedule(make_schedule(TODAY, frequency_weeks=26, notes="Fleet A"))
        result = await roll_forward_series(store, TENANT_A, done.id)

        assert [s.scheduled_date for s in result.created] == [TODAY + timedelta(weeks=26), TODAY + timedelta(weeks=52)]
        assert all(s.notes == "Fleet A" for s in result.created)

    @pytest.mark.asyncio
    async def test_series_with_later_occurrences_is_left_alone(self, store):
        done = store.insert_schedule(make_schedule(TODAY))
        store.insert_schedule(make_schedule(TODAY + timedelta(weeks=8)))
        result = await roll_forward_series(store, TENANT_A, done.id)

        assert result.created == []
        assert len(series_dates(store)) == 2

    @pytest.mark.asyncio
    async def test_unknown_schedule_raises(self, store):
        with pytest.raises(ScheduleNotFound):
            await roll_forward_series(store, TENANT_A, "does-not-exist")

    @pytest.mark.asyncio
    async def test_other_tenants_schedule_is_not_found(self, store):
        done = store.insert_schedule(make_schedule(TODAY, tenant_id=TENANT_B))
        with pytest.raises(ScheduleNotFound):
            await roll_forward_series(store, TENANT_A, done.id)
        assert len(store.list_active_schedules(TENANT_B)) == 1

    @pytest.mark.asyncio
    async def test_missing_tenant_rejected(self, store):
        with pytest.raises(ValidationError):
            await roll_forward_series(store, None, "any")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("horizon", [0, -26])
    async def test_non_positive_horizon_rejected(self, store, horizon):
        done = store.insert_schedule(make_schedule(TODAY, frequency_weeks=26))
        with pytest.raises(ValidationError):
            await roll_forward_series(store, TENANT_A, done.id, horizon_weeks=horizon)
        assert len(series_dates(store)) == 1

    @pytest.mark.asyncio
    async def test_explicit_horizon_is_used(self, store):
        done = store.insert_schedule(make_schedule(TODAY, frequency_weeks=4))
        result = await roll_forward_series(store, TENANT_A, done.id, horizon_weeks=12)
        assert [s.scheduled_date for s in result.created] == [TODAY + timedelta(weeks=w) for w in (4, 8, 12)]
