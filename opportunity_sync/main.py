"""Scheduled opportunity sync with APScheduler.

- SAM.gov runs on a cron at the configured UTC hours with a small search
  cap, keeping inside its 10-requests-per-day quota
- Every other enabled provider runs on the polling interval
- `--once [provider ...]` runs a single cycle and exits
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config, load_config
from .database import SupabaseClient
from .service import SyncService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def build_service(config: Config) -> SyncService:
    store = SupabaseClient(config.supabase_url, config.supabase_key)
    return SyncService(config, store)


async def sync_provider(service: SyncService, provider: str, max_searches: Optional[int] = None) -> int:
    """Run one automated sync and log its outcome. Returns the HTTP-style status."""
    start_time = datetime.now(timezone.utc)
    status, body = await service.trigger(provider, automated=True, max_searches=max_searches)
    duration = (datetime.now(timezone.utc) - start_time).total_seconds()
    if status == 200:
        logger.info(f"✓ {provider}: {body.get('message')} ({duration:.2f}s)")
    elif status == 429:
        logger.warning(f"⚠ {provider}: {body.get('message')}; next reset {body.get('nextResetTime')}")
    else:
        logger.error(f"✗ {provider}: {body.get('error')} - {body.get('details')}")
    return status


async def poll_providers(service: SyncService, providers: List[str]) -> None:
    """Sync each provider in turn; one provider failing does not stop the rest."""
    logger.info("=" * 60)
    logger.info(f"Starting polling cycle: {', '.join(providers)}")
    logger.info("=" * 60)
    for provider in providers:
        try:
            await sync_provider(service, provider)
        except Exception as e:
            logger.error(f"{provider} sync crashed: {e}", exc_info=True)
    logger.info("Polling cycle completed")


async def run_once(providers: Optional[List[str]] = None) -> None:
    """Run one cycle (for testing and manual execution)."""
    config = load_config()
    service = build_service(config)
    await poll_providers(service, providers or config.enabled_providers)


def schedule_jobs(scheduler: AsyncIOScheduler, service: SyncService, config: Config) -> None:
    interval_providers = [p for p in config.enabled_providers if p != "sam_gov"]
    if interval_providers:
        scheduler.add_job(
            poll_providers,
            trigger=IntervalTrigger(minutes=config.polling_interval_minutes),
            args=[service, interval_providers],
            id="poll_providers",
            name="Poll unmetered providers",
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
        )
    if "sam_gov" in config.enabled_providers:
        scheduler.add_job(
            sync_provider,
            trigger=CronTrigger(hour=config.sam_sync_hours, minute=0, timezone="UTC"),
            args=[service, "sam_gov", config.sam_scheduled_max_searches],
            id="sync_sam_gov",
            name="SAM.gov quota-limited sync",
            replace_existing=True,
            max_instances=1,
        )


def start_scheduler():
    """Start APScheduler for continuous syncing."""
    config = load_config()

    # Configure logging level
    logging.getLogger().setLevel(config.log_level)

    logger.info("Initializing Opportunity Sync")
    logger.info(f"Polling interval: {config.polling_interval_minutes} minutes")
    logger.info(f"SAM.gov hours (UTC): {config.sam_sync_hours}")

    service = build_service(config)
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    scheduler = AsyncIOScheduler(event_loop=loop)
    schedule_jobs(scheduler, service, config)
    scheduler.start()
    logger.info("✓ Scheduler started")

    try:
        loop.run_forever()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down scheduler...")
        scheduler.shutdown()
        logger.info("✓ Scheduler stopped")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Funding opportunity sync")
    parser.add_argument(
        "--once", nargs="*", metavar="PROVIDER",
        help="Run one cycle for the given providers (default: all enabled) and exit",
    )
    args = parser.parse_args(argv)
    if args.once is not None:
        asyncio.run(run_once(args.once))
    else:
        start_scheduler()


if __name__ == "__main__":
    main()
