"""
End-to-end fine-tuning: upload files, create the job, monitor it, and
optionally query the resulting model.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from errors import JobCancelled, PreconditionError
from training.jobs import create_fine_tuning_job
from training.monitor import JobMonitor
from training.upload import upload_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FineTuneResult:
    """Outcome of a fine-tuning run: succeeded, failed or cancelled."""
    status: str
    job_id: Optional[str]
    fine_tuned_model: Optional[str] = None
    job: object = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded" and bool(self.fine_tuned_model)


def initiate_fine_tuning(
    client,
    training_path,
    validation_path,
    model: str,
    hyperparameters: Optional[dict] = None,
    suffix: Optional[str] = None,
    **monitor_options,
) -> FineTuneResult:
    """
    Upload both files, create a fine-tuning job and wait for it to finish.

    Upload, submission and polling errors propagate unchanged. Files that
    were uploaded before a later step failed are left in place.

    Args:
        client: OpenAI client
        training_path: Path to the training JSONL file
        validation_path: Path to the validation JSONL file
        model: Base model to fine-tune
        hyperparameters: Optional hyperparameters for the job
        suffix: Optional suffix for the fine-tuned model name
        **monitor_options: Passed to JobMonitor (poll_interval, sleep,
            cancel_event, ...)

    Returns:
        FineTuneResult; status "cancelled" with job_id None if the cancel
        signal was set before the job was submitted, or with the job ID if
        monitoring was cancelled
    """
    if not training_path or not validation_path:
        raise PreconditionError("Training file path and validation file path must be provided.")

    training_file_id = upload_file(client, training_path)
    logger.info("Training file uploaded with ID: %s", training_file_id)
    if _cancel_requested(monitor_options):
        return _cancelled_before_submission()

    validation_file_id = upload_file(client, validation_path)
    logger.info("Validation file uploaded with ID: %s", validation_file_id)
    if _cancel_requested(monitor_options):
        return _cancelled_before_submission()

    job_id = create_fine_tuning_job(
        client,
        training_file_id,
        validation_file_id,
        model=model,
        hyperparameters=hyperparameters,
        suffix=suffix,
    )

    monitor = JobMonitor(client, job_id, **monitor_options)
    try:
        job = monitor.run()
    except JobCancelled as e:
        return FineTuneResult(status="cancelled", job_id=job_id, job=e.job)

    fine_tuned_model = getattr(job, 'fine_tuned_model', None)
    if job.status == "succeeded":
        if fine_tuned_model:
            logger.info("Fine-tuning succeeded. Model ID: %s", fine_tuned_model)
        else:
            logger.warning("Job %s succeeded but no model ID found", job_id)
    else:
        error = getattr(job, 'error', None)
        error_msg = getattr(error, 'message', None) if error else None
        logger.warning("Fine-tuning %s (job %s)%s", job.status, job_id,
                       f": {error_msg}" if error_msg else "")

    return FineTuneResult(
        status=job.status,
        job_id=job_id,
        fine_tuned_model=fine_tuned_model,
        job=job,
    )


def _cancel_requested(monitor_options: dict) -> bool:
    cancel_event = monitor_options.get("cancel_event")
    return cancel_event is not None and cancel_event.is_set()


def _cancelled_before_submission() -> FineTuneResult:
    logger.info("Cancelled before the fine-tuning job was created")
    return FineTuneResult(status="cancelled", job_id=None)


def fine_tune_and_ask(helper, training_path, validation_path, query: str, **monitor_options) -> Optional[str]:
    """
    Fine-tune a model, then ask it a question.

    Library-level entry point; training.fine_tune runs the same steps
    itself so it can report the job ID and status.

    Args:
        helper: OpenAIHelper
        training_path: Path to the training JSONL file
        validation_path: Path to the validation JSONL file
        query: Question for the fine-tuned model
        **monitor_options: Passed to JobMonitor

    Returns:
        The model's answer, or None if fine-tuning did not succeed
    """
    if not training_path or not validation_path:
        raise PreconditionError("Training file path and validation file path must be provided.")
    if not query:
        raise PreconditionError("A query to test the model must be provided.")

    result = helper.initiate_fine_tuning(training_path, validation_path, **monitor_options)
    if not result.succeeded:
        return None

    return helper.ask_model(query, result.fine_tuned_model)


def ask(helper, query: str, model: Optional[str] = None, temperature: Optional[float] = None) -> str:
    """Ask a model (default: the helper's configured model) a question."""
    if not query:
        raise PreconditionError("A query to test the model must be provided.")
    return helper.ask_model(query, model, temperature)
