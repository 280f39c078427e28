"""Scheduler implementation for the URL shortener application.

This module provides a scheduler service that runs the expiry sweep
as a background task using APScheduler.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.repositories.url_repository import URLRepository
from app.services.cleanup import CleanupService

logger = logging.getLogger(__name__)

CLEANUP_JOB_ID = "cleanup_expired_urls"
STARTUP_CLEANUP_JOB_ID = "cleanup_startup"


async def cleanup_expired_urls_job(url_repository: URLRepository) -> Dict[str, Any]:
    """
    Job to cleanup expired URLs.

    Errors are logged and reported in the returned dict so that a failed
    sweep never takes the scheduler down.
    """
    logger.debug("Starting scheduled cleanup of expired URLs")
    try:
        cleanup_service = CleanupService(url_repository)
        result = await cleanup_service.cleanup_expired_urls()
        logger.info(
            f"Scheduled cleanup completed: Processed={result['processed']}, Deleted={result['deleted']}"
        )
        return result
    except Exception as e:
        logger.error(f"Error in scheduled URL cleanup job: {e}", exc_info=True)
        return {
            "status": "error",
            "error": str(e),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }


class SchedulerService:
    """
    Scheduler service for managing background tasks.

    This service provides a wrapper around APScheduler to handle
    scheduling and execution of the expiry sweep against one record store.
    """

    def __init__(self):
        """Initialize the scheduler service."""
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.is_running = False
        self.jobs: List[Dict[str, Any]] = []

    def initialize(self) -> None:
        """
        Initialize the scheduler.

        This sets up APScheduler with the configured job defaults,
        but does not start it yet.
        """
        if self.scheduler:
            logger.warning("Scheduler already initialized")
            return

        self.scheduler = AsyncIOScheduler(
            job_defaults={
                'coalesce': settings.SCHEDULER_JOB_COALESCE,
                'max_instances': settings.SCHEDULER_JOB_MAX_INSTANCES,
                'misfire_grace_time': settings.SCHEDULER_MISFIRE_GRACE_TIME
            },
            timezone='UTC',
        )
        logger.info("Scheduler initialized")

    def start(self, url_repository: URLRepository) -> None:
        """
        Start the scheduler and register the sweep jobs.

        Must be called from within a running event loop.

        Args:
            url_repository: The store the sweep operates on
        """
        if not self.scheduler:
            self.initialize()

        if self.is_running:
            logger.warning("Scheduler already running")
            return

        try:
            self.scheduler.add_job(
                cleanup_expired_urls_job,
                trigger=IntervalTrigger(
                    seconds=settings.CLEANUP_INTERVAL.total_seconds(),
                    timezone='UTC'
                ),
                args=[url_repository],
                id=CLEANUP_JOB_ID,
                name='Cleanup Expired URLs',
                replace_existing=True
            )
            self.jobs = [{
                'id': CLEANUP_JOB_ID,
                'name': 'Cleanup Expired URLs',
                'interval': f'{settings.CLEANUP_INTERVAL_MINUTES:g} minutes',
                'function': 'cleanup_expired_urls_job'
            }]

            if settings.CLEANUP_START_ON_STARTUP:
                logger.info("Running cleanup job on startup")
                # No trigger means a single run as soon as the scheduler starts
                self.scheduler.add_job(
                    cleanup_expired_urls_job,
                    args=[url_repository],
                    id=STARTUP_CLEANUP_JOB_ID,
                    name='Startup Cleanup',
                    replace_existing=True
                )

            self.scheduler.start()
            self.is_running = True
            logger.info(f"Scheduler started with {len(self.jobs)} jobs")
        except Exception as e:
            logger.error(f"Error starting scheduler: {e}", exc_info=True)
            self.is_running = False
            raise

    def shutdown(self) -> None:
        """Stop the scheduler without waiting for a running sweep."""
        if not self.scheduler or not self.is_running:
            logger.debug("Scheduler not running, nothing to shut down")
            return

        self.scheduler.shutdown(wait=False)
        self.is_running = False
        self.scheduler = None
        self.jobs = []
        logger.info("Scheduler shut down successfully")

    def get_status(self) -> Dict[str, Any]:
        """
        Get the current status of the scheduler.

        Returns:
            Dict with information about the scheduler status and jobs
        """
        job_details = []
        if self.scheduler and self.is_running:
            for job in self.scheduler.get_jobs():
                job_details.append({
                    'job_id': job.id,
                    'name': job.name,
                    'next_run_time': job.next_run_time.isoformat() if job.next_run_time else None
                })

        return {
            'running': self.is_running,
            'jobs': self.jobs,
            'scheduler_jobs_status': job_details
        }


# Global instance of the scheduler service
scheduler_service = SchedulerService()
