"""Background scheduler that drives the reminder dispatcher.

APScheduler runs the job on a fixed interval with max_instances=1, so a
tick that fires while the previous one is still working is dropped rather
than started in parallel. The dispatcher's own run lock backs that up for
callers outside the scheduler (CLI, tests).
"""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config.reminders import ReminderConfig
from .services.reminder_dispatcher import ReminderDispatcher
from .utils.timezone import now_utc

logger = logging.getLogger(__name__)

JOB_ID = 'event-reminders'


class ReminderScheduler:
    """Runs ReminderDispatcher.run_once every `interval_minutes`."""

    def __init__(
        self,
        dispatcher: ReminderDispatcher,
        config: Optional[ReminderConfig] = None,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.dispatcher = dispatcher
        self.config = config or ReminderConfig()
        self.config.validate()
        self._scheduler = scheduler or BackgroundScheduler(timezone='UTC')

    @property
    def is_running(self) -> bool:
        return self._scheduler.running

    def start(self, run_immediately: bool = True) -> None:
        """Register the reminder job and start the background thread."""
        if self.is_running:
            logger.debug("ReminderScheduler already running")
            return

        job_options = {}
        if run_immediately:
            # next_run_time=None would add the job paused
            job_options["next_run_time"] = now_utc()

        self._scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(minutes=self.config.interval_minutes),
            id=JOB_ID,
            name='Event reminder dispatch',
            max_instances=1,
            coalesce=True,
            # A tick delayed by less than one interval still runs
            misfire_grace_time=self.config.interval_minutes * 60,
            replace_existing=True,
            **job_options,
        )
        self._scheduler.start()
        logger.info(f"ReminderScheduler started, interval: {self.config.interval_minutes} min")

    def shutdown(self, wait: bool = True) -> None:
        """Stop scheduling; with wait=True, let a running tick finish first."""
        if not self.is_running:
            return
        self._scheduler.shutdown(wait=wait)
        self.dispatcher.close()
        logger.info("ReminderScheduler stopped")

    def _tick(self) -> None:
        report = self.dispatcher.run_once()
        if report is None:
            return
        if report.selected or report.selection_failed:
            logger.info(
                f"Reminder run: {len(report.selected)} selected, {len(report.marked_sent)} marked, "
                f"{len(report.failed)} failed, {report.notifications_sent} notifications sent, "
                f"{report.notifications_failed} failed"
            )
