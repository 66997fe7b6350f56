# scripts/setup/init_db.py
"""
Initialize database — creates the inspection_schedules table and its indexes.
Run once before first launch, or after changing models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from compliance_scheduler.database import create_tables, engine
from compliance_scheduler.config import settings
from sqlalchemy import inspect, text


def main():
    print("🗄️  Compliance Scheduler DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    print("✅ All tables created")

    inspector = inspect(engine)
    tables = sorted(inspector.get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")
        for idx in inspector.get_indexes(t):
            flag = " (unique)" if idx.get("unique") else ""
            print(f"       · {idx['name']}{flag}")

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn compliance_scheduler.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
