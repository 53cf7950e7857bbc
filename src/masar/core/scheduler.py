"""
Background Job Scheduler

Periodic task execution using APScheduler's AsyncIOScheduler, started and
stopped from the FastAPI lifespan. Jobs are registered before start and
kept in a registry so they can also be triggered on demand.
"""

import logging
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, JobExecutionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.base import BaseTrigger

logger = logging.getLogger(__name__)

JobFunc = Callable[[], Coroutine[Any, Any, Any]]

_scheduler: AsyncIOScheduler | None = None

# job_id -> (func, trigger)
_job_registry: dict[str, tuple[JobFunc, BaseTrigger]] = {}

JOB_DEFAULTS = {
    "coalesce": True,  # Combine missed executions into one
    "max_instances": 1,
    "misfire_grace_time": 60 * 5,
}


def _job_listener(event: JobExecutionEvent) -> None:
    if event.exception:
        logger.error(
            f"Job {event.job_id} failed with exception: {event.exception}",
            exc_info=event.exception,
        )
    else:
        logger.info(f"Job {event.job_id} executed successfully")


def register_job(job_id: str, func: JobFunc, trigger: BaseTrigger) -> None:
    """
    Register a job. Jobs registered before start_scheduler() are scheduled
    when it runs; later registrations are scheduled immediately.
    """
    _job_registry[job_id] = (func, trigger)

    if _scheduler is not None:
        _scheduler.add_job(func, trigger=trigger, id=job_id, replace_existing=True)
        logger.info(f"Registered job: {job_id}")


async def start_scheduler() -> AsyncIOScheduler:
    """Create the scheduler, add every registered job and start it."""
    global _scheduler

    if _scheduler is not None and _scheduler.running:
        logger.warning("Scheduler already running, returning existing instance")
        return _scheduler

    _scheduler = AsyncIOScheduler(timezone="UTC", job_defaults=JOB_DEFAULTS)
    _scheduler.add_listener(_job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    for job_id, (func, trigger) in _job_registry.items():
        _scheduler.add_job(func, trigger=trigger, id=job_id, replace_existing=True)
        logger.info(f"Scheduled job: {job_id}")

    _scheduler.start()
    logger.info("Background job scheduler started")
    return _scheduler


async def stop_scheduler() -> None:
    """Stop the scheduler, waiting for running jobs."""
    global _scheduler

    if _scheduler is None or not _scheduler.running:
        return

    _scheduler.shutdown(wait=True)
    _scheduler = None
    logger.info("Background job scheduler stopped")


async def trigger_job_manually(job_id: str) -> dict[str, Any]:
    """
    Run a registered job immediately, outside its schedule.

    Raises:
        ValueError: If job_id is not registered
    """
    if job_id not in _job_registry:
        raise ValueError(
            f"Job {job_id} not found in registry. Available jobs: {list(_job_registry)}"
        )

    func, _ = _job_registry[job_id]
    executed_at = datetime.now(UTC)
    logger.info(f"Manually triggering job: {job_id}")

    try:
        result = await func()
    except Exception as e:
        logger.error(f"Manual execution of job {job_id} failed: {e}", exc_info=True)
        return {
            "job_id": job_id,
            "status": "error",
            "executed_at": executed_at.isoformat(),
            "error": str(e),
        }

    return {
        "job_id": job_id,
        "status": "success",
        "executed_at": executed_at.isoformat(),
        "result": result,
    }


def list_registered_jobs() -> list[dict[str, Any]]:
    """List registered jobs with their next run time when scheduled."""
    jobs = []
    for job_id in _job_registry:
        job_info: dict[str, Any] = {"job_id": job_id, "next_run_time": None}
        if _scheduler is not None:
            scheduled = _scheduler.get_job(job_id)
            if scheduled and scheduled.next_run_time:
                job_info["next_run_time"] = scheduled.next_run_time.isoformat()
        jobs.append(job_info)
    return jobs
