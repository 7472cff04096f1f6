#!/usr/bin/env python3
"""
Warm the CRM cache and print a snapshot.

Usage:
    python run.py              # Dashboard snapshot
    python run.py companies    # Companies by last activity
    python run.py weeks        # Weekly business summary
    python run.py status       # Cached datasets and last write
"""

import asyncio
import sys

from app.container import container
from settings.logging import setup_logging

logger = setup_logging()


async def show_dashboard():
    data = await container.dashboard.get_dashboard_data()
    stats = data.contact_stats

    print("\n" + "=" * 60)
    print(f"DASHBOARD  (week {data.week_id})")
    print("=" * 60)
    print(f"Business cards: {stats.total:,}  pending {stats.pending}  processed {stats.processed}  dropped {stats.dropped}")
    print("\nOpportunities by stage:")
    for stage, count in sorted(data.opportunities_by_stage.items(), key=lambda kv: -kv[1]):
        print(f"  {stage:<20} {count}")
    print("\nRecent interactions:")
    for i in data.recent_interactions:
        print(f"  {i.interaction_time[:10]}  {i.context_name}  {i.event_title or i.event_type}")
    print(f"\nAnnouncements: {len(data.announcements)}   Entries this week: {len(data.week_entries)}")
    print("=" * 60 + "\n")


async def show_companies():
    for company in await container.companies.get_company_list_with_activity():
        print(f"  {company.last_activity or '-':<26} {company.company_name}")


async def show_weeks():
    for week in await container.weekly.get_summary_list():
        print(f"  {week.id}  {week.date_range}  summaries: {week.summary_count}")


async def show_status():
    # Touch the system config so the status has something to report
    await container.system.get_system_config()
    status = container.system.get_system_status()
    print(f"Last write: {status.last_write_timestamp or 'none'}")
    print(f"Cached: {', '.join(status.cached_keys) or 'nothing'}")


COMMANDS = {
    "dashboard": show_dashboard,
    "companies": show_companies,
    "weeks": show_weeks,
    "status": show_status,
}


async def main(command: str):
    container.init()
    try:
        await COMMANDS[command]()
    finally:
        await container.close()


if __name__ == "__main__":
    args = sys.argv[1:]
    command = args[0] if args else "dashboard"
    if command not in COMMANDS:
        print(__doc__)
        sys.exit(1)
    logger.info("Running {}", command)
    asyncio.run(main(command))
