"""
Selection Background Jobs

Daily reconciliation of school shortlists against acceptance records.
The job only reads and logs; it never modifies either representation.
"""

import logging
from typing import Any

from apscheduler.triggers.interval import IntervalTrigger

from masar.core.database import get_session_maker
from masar.core.scheduler import register_job
from masar.modules.selection.service import build_reconciliation_report

logger = logging.getLogger(__name__)

JOB_ID_RECONCILE_SELECTIONS = "selection_reconcile_acceptances"
RECONCILE_INTERVAL_HOURS = 24


async def reconcile_selections() -> dict[str, Any]:
    """
    Compute the shortlist/acceptance reconciliation report and log divergence.

    Returns:
        Summary counts of the report
    """
    session_maker = get_session_maker()
    async with session_maker() as db:
        report = await build_reconciliation_report(db)

    summary = {
        "shortlist_only": len(report.shortlist_only),
        "acceptance_only": len(report.acceptance_only),
        "in_both": report.in_both,
    }

    if summary["shortlist_only"] or summary["acceptance_only"]:
        logger.warning(
            f"Selection divergence: {summary['shortlist_only']} shortlisted without acceptance, "
            f"{summary['acceptance_only']} accepted without shortlist"
        )
    else:
        logger.info(f"Selections reconciled: {report.in_both} pairs consistent")

    return summary


def register_selection_jobs() -> None:
    """Register selection jobs with the scheduler. Call before start_scheduler()."""
    register_job(
        job_id=JOB_ID_RECONCILE_SELECTIONS,
        func=reconcile_selections,
        trigger=IntervalTrigger(hours=RECONCILE_INTERVAL_HOURS),
    )
    logger.info(
        f"Registered job: {JOB_ID_RECONCILE_SELECTIONS} (interval: {RECONCILE_INTERVAL_HOURS} hours)"
    )
