"""
Monitor a fine-tuning job until it reaches a terminal status.

A JobMonitor follows exactly one job. Each cycle it retrieves the job,
returns it if the status is terminal, otherwise shows the latest job events
in chronological order and sleeps for a fixed interval.

Usage:
    monitor = JobMonitor(client, job_id)
    job = monitor.run()
    if job.status == "succeeded":
        print(job.fine_tuned_model)
"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

import openai

from config import EVENT_LIMIT, POLL_INTERVAL_SECONDS
from errors import JobCancelled, PollingError

logger = logging.getLogger(__name__)

# Statuses after which the job can still change; anything else is terminal
ACTIVE_STATUSES = ("validating_files", "queued", "running")

KNOWN_TERMINAL_STATUSES = ("succeeded", "failed", "cancelled")


def is_terminal(status: str) -> bool:
    """Return True once a job can no longer change status."""
    return status not in ACTIVE_STATUSES


def log_event(event) -> None:
    """Default event sink: log one job event."""
    created_at = getattr(event, 'created_at', None)
    if created_at:
        created_str = datetime.fromtimestamp(created_at).strftime("%H:%M:%S")
        logger.info("Event [%s]: %s", created_str, event.message)
    else:
        logger.info("Event: %s", event.message)


class JobMonitor:
    """
    Poll one fine-tuning job until it succeeds, fails or is cancelled.

    Args:
        client: OpenAI client
        job_id: ID of the fine-tuning job to follow
        poll_interval: Seconds to sleep between status checks
        event_limit: Number of most recent events fetched per check
        sleep: Called with poll_interval between checks
        clock: Monotonic clock used for the elapsed time in status lines
        cancel_event: Object with is_set() (e.g. threading.Event); checked
            before each sleep
        on_event: Called with each job event, oldest first
    """

    def __init__(
        self,
        client,
        job_id: str,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        event_limit: int = EVENT_LIMIT,
        sleep: Callable[[float], object] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        cancel_event=None,
        on_event: Optional[Callable] = None,
    ):
        self.client = client
        self.job_id = job_id
        self.poll_interval = poll_interval
        self.event_limit = event_limit
        self.sleep = sleep
        self.clock = clock
        self.cancel_event = cancel_event
        self.on_event = on_event or log_event

        self.polls = 0
        self.last_status = None
        self.last_job = None
        self.final_job = None
        self._started_at = None

    @property
    def done(self) -> bool:
        return self.final_job is not None

    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def run(self):
        """
        Poll until the job reaches a terminal status.

        Returns:
            The final job record (including fine_tuned_model when present)

        Raises:
            PollingError: If a status or event query fails
            JobCancelled: If the cancel signal is set before a sleep
        """
        if self.done:
            return self.final_job

        logger.info("Monitoring fine-tuning job %s (checking every %ss)",
                    self.job_id, self.poll_interval)

        while True:
            job = self.step()
            if job is not None:
                return job

            if self.cancelled():
                logger.info("Monitoring of job %s cancelled", self.job_id)
                raise JobCancelled(self.job_id, self.last_job)

            self.sleep(self.poll_interval)

    def step(self):
        """
        Run one poll cycle.

        Returns:
            The job record if its status is terminal, otherwise None
        """
        if self.done:
            return self.final_job

        if self._started_at is None:
            self._started_at = self.clock()

        job = self._retrieve()
        self.polls += 1
        self.last_job = job
        status = job.status

        self._log_status(job)
        self.last_status = status

        if is_terminal(status):
            if status not in KNOWN_TERMINAL_STATUSES:
                logger.warning("Unknown status %r for job %s; treating it as terminal",
                               status, self.job_id)
            self.final_job = job
            return job

        for event in self._recent_events():
            self.on_event(event)
        return None

    def _retrieve(self):
        try:
            return self.client.fine_tuning.jobs.retrieve(self.job_id)
        except openai.OpenAIError as e:
            raise PollingError(f"Could not retrieve job {self.job_id}: {e}", self.job_id) from e

    def _recent_events(self) -> list:
        """Latest events, oldest first (the API lists most recent first)."""
        try:
            events = self.client.fine_tuning.jobs.list_events(self.job_id, limit=self.event_limit)
        except openai.OpenAIError as e:
            raise PollingError(f"Could not list events for job {self.job_id}: {e}", self.job_id) from e
        return list(reversed(events.data))

    def _log_status(self, job) -> None:
        elapsed = int(self.clock() - self._started_at)
        status_parts = [f"Status: {str(job.status).upper()}"]
        status_parts.append(f"Elapsed: {elapsed // 60}m {elapsed % 60}s")

        trained_tokens = getattr(job, 'trained_tokens', None)
        if trained_tokens:
            status_parts.append(f"Trained: {trained_tokens:,} tokens")

        if self.polls == 1 or job.status != self.last_status:
            logger.info(" | ".join(status_parts))
        else:
            logger.debug(" | ".join(status_parts))
