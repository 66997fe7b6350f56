# tests/conftest.py
"""Shared fixtures: an in-memory SQLite schedule store and schedule builders."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from compliance_scheduler.database import Base, create_tables
from compliance_scheduler.models.inspection_schedule import InspectionSchedule
from compliance_scheduler.services.schedule_store import ScheduleStore

TENANT_A = "11111111-1111-1111-1111-111111111111"
TENANT_B = "22222222-2222-2222-2222-222222222222"
VEHICLE_1 = "aaaaaaaa-0000-0000-0000-000000000001"
VEHICLE_2 = "aaaaaaaa-0000-0000-0000-000000000002"
TODAY = date(2026, 3, 2)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def store(db_session):
    return ScheduleStore(db_session)


def make_schedule(scheduled_date, tenant_id=TENANT_A, vehicle_id=VEHICLE_1,
                  inspection_type="safety_inspection", frequency_weeks=8,
                  is_active=True, maintenance_provider_id=None, notes=None):
    return InspectionSchedule(
        tenant_id=tenant_id,
        vehicle_id=vehicle_id,
        maintenance_provider_id=maintenance_provider_id,
        inspection_type=inspection_type,
        scheduled_date=scheduled_date,
        frequency_weeks=frequency_weeks,
        notes=notes,
        is_active=is_active,
    )


def series_dates(store, tenant_id=TENANT_A, vehicle_id=VEHICLE_1, inspection_type="safety_inspection"):
    return [s.scheduled_date for s in store.list_active_schedules(tenant_id, vehicle_id, inspection_type)]
