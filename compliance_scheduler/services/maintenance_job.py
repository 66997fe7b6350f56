# compliance_scheduler/services/maintenance_job.py
"""
Periodic horizon maintenance: the timer trigger for maintain_horizon.

Runs one pass over the configured tenants every MAINTENANCE_INTERVAL_SECONDS.
Unlike a direct maintain_horizon call, the timer only tops up series with fewer
than MIN_FUTURE_OCCURRENCES (default 3) occurrences after today, so repeated
ticks don't keep pushing every series another horizon further out.
Each tenant gets a fresh DB session so a broken connection for one never
leaks into the next. A pass that fails is simply retried on the next tick;
maintenance is idempotent.
"""

import asyncio
from datetime import date

from compliance_scheduler.config import settings
from compliance_scheduler.database import SessionLocal
from compliance_scheduler.services.horizon_service import maintain_horizon
from compliance_scheduler.services.schedule_store import ScheduleStore
from compliance_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

# Series already holding this many future occurrences are left alone by the timer
JOB_MIN_FUTURE_OCCURRENCES = 3


async def run_maintenance_pass(tenant_ids, horizon_weeks=None, session_factory=SessionLocal) -> dict:
    """Maintain every tenant once. Returns {tenant_id: HorizonResult or None on crash}."""
    results = {}
    today = date.today()
    min_future = settings.MIN_FUTURE_OCCURRENCES or JOB_MIN_FUTURE_OCCURRENCES
    for tenant_id in tenant_ids:
        db = session_factory()
        try:
            results[tenant_id] = await maintain_horizon(
                ScheduleStore(db),
                tenant_id,
                today=today,
                horizon_weeks=horizon_weeks,
                min_future_occurrences=min_future,
            )
        except Exception as e:
            logger.error(f"❌ Maintenance pass crashed for tenant {tenant_id}: {e}", exc_info=True)
            results[tenant_id] = None
        finally:
            db.close()
    return results


async def start_horizon_maintenance(tenant_ids, interval_seconds: int = None):
    """
    Loop forever, running a maintenance pass then sleeping.
    Called once at backend startup as a background task.
    """
    if not tenant_ids:
        logger.warning("No tenants configured — horizon maintenance job disabled.")
        return

    interval = interval_seconds or settings.MAINTENANCE_INTERVAL_SECONDS
    logger.info(f"🚀 Horizon maintenance every {interval}s for {len(tenant_ids)} tenants")
    while True:
        results = await run_maintenance_pass(tenant_ids)
        created = sum(r.schedules_created for r in results.values() if r)
        logger.info(f"🗓  Maintenance pass done — {created} schedules created")
        await asyncio.sleep(interval)
