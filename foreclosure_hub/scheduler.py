import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from foreclosure_hub.core.config import settings

# --- WORKERS ---
from foreclosure_hub.workers.links.expiration_worker import run as run_link_expiration

logger = logging.getLogger(__name__)
scheduler = BackgroundScheduler(timezone=settings.SCHEDULER_TIMEZONE)


# ---------------------------------------------------------
# SCHEDULER SETUP
# ---------------------------------------------------------
def start_scheduler():
    if scheduler.running:
        return

    # 1. Link expiration (Daily at 2 AM, Central time)
    scheduler.add_job(
        run_link_expiration,
        CronTrigger(hour=2, minute=0, timezone=settings.SCHEDULER_TIMEZONE),
        id="link_expiration",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("🚀 Background Scheduler Started.")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
