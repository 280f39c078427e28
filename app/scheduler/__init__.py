"""Scheduler module for the URL shortener application.

This module provides scheduled task functionality using APScheduler.
"""

from app.scheduler.scheduler import SchedulerService, cleanup_expired_urls_job, scheduler_service

__all__ = ["SchedulerService", "cleanup_expired_urls_job", "scheduler_service"]
