"""
Exceptions raised by the fine-tuning helper.

Each remote step has its own error type; the SDK or OS exception that caused
it is kept as __cause__.
"""


class FineTuningError(Exception):
    """Base class for all helper errors."""


class PreconditionError(FineTuningError, ValueError):
    """A required argument was missing; raised before any API call."""


class TransferError(FineTuningError):
    """Uploading a file failed (unreadable source or rejected upload)."""

    def __init__(self, message: str, filepath=None):
        super().__init__(message)
        self.filepath = filepath


class SubmissionError(FineTuningError):
    """Creating the fine-tuning job was rejected."""


class PollingError(FineTuningError):
    """A status or event query failed while monitoring a job."""

    def __init__(self, message: str, job_id: str):
        super().__init__(message)
        self.job_id = job_id


class CompletionError(FineTuningError):
    """A chat completion failed or returned no usable choice."""


class JobCancelled(FineTuningError):
    """Monitoring was stopped by an external cancellation signal."""

    def __init__(self, job_id: str, job=None):
        super().__init__(f"Monitoring of job {job_id} was cancelled")
        self.job_id = job_id
        self.job = job
