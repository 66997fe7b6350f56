# scripts/jobs/run_maintenance.py
"""
Run one horizon maintenance pass and exit, for cron or a manual top-up.
Usage: python scripts/jobs/run_maintenance.py --tenant <id> [--tenant <id> ...] [--horizon 52]
With no --tenant, MAINTENANCE_TENANT_IDS from .env is used.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
import asyncio

from compliance_scheduler.config import settings
from compliance_scheduler.services.maintenance_job import run_maintenance_pass


def main():
    parser = argparse.ArgumentParser(description="Top up recurring inspection series to the horizon")
    parser.add_argument("--tenant", action="append", dest="tenants")
    parser.add_argument("--horizon", type=int, default=settings.DEFAULT_HORIZON_WEEKS)
    args = parser.parse_args()

    tenants = args.tenants or settings.MAINTENANCE_TENANTS
    if not tenants:
        print("❌ No tenants given (use --tenant or set MAINTENANCE_TENANT_IDS)")
        sys.exit(1)

    results = asyncio.run(run_maintenance_pass(tenants, horizon_weeks=args.horizon))

    failed = False
    for tenant_id, result in results.items():
        if result is None:
            print(f"❌ {tenant_id}: pass crashed, see logs")
            failed = True
            continue
        mark = "✅" if result.success else "⚠️ "
        print(f"{mark} {tenant_id}: {result.series_processed} series, "
              f"{result.schedules_created} created, {len(result.errors)} errors")
        for err in result.errors:
            print(f"     - {err}")
        failed = failed or not result.success
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
