"""
Create fine-tuning jobs.
"""

import logging
from typing import Optional

import openai

from errors import PreconditionError, SubmissionError

logger = logging.getLogger(__name__)


def create_fine_tuning_job(
    client,
    training_file_id: str,
    validation_file_id: Optional[str] = None,
    model: Optional[str] = None,
    hyperparameters: Optional[dict] = None,
    suffix: Optional[str] = None,
) -> str:
    """
    Create a fine-tuning job and return its job ID.

    File contents are not checked here; OpenAI validates them once the job
    starts (status "validating_files").

    Args:
        client: OpenAI client
        training_file_id: OpenAI file ID for the training data
        validation_file_id: Optional OpenAI file ID for the validation data
        model: Base model to fine-tune
        hyperparameters: Optional hyperparameters; omitted when empty so
            OpenAI auto-selects them
        suffix: Optional string added to the fine-tuned model name

    Returns:
        Job ID for tracking fine-tuning progress

    Raises:
        PreconditionError: If the training file ID or model is missing
        SubmissionError: If OpenAI rejects the job
    """
    if not training_file_id:
        raise PreconditionError("A training file ID must be provided.")
    if not model:
        raise PreconditionError("A base model must be provided.")

    params = {
        "training_file": training_file_id,
        "model": model,
    }
    if validation_file_id:
        params["validation_file"] = validation_file_id
    if hyperparameters:
        params["hyperparameters"] = hyperparameters
    if suffix:
        params["suffix"] = suffix

    logger.info("Creating fine-tuning job (base model: %s)", model)
    if hyperparameters:
        logger.info("Hyperparameters: %s", hyperparameters)
    else:
        logger.info("Hyperparameters: using OpenAI's auto-selected defaults")

    try:
        job = client.fine_tuning.jobs.create(**params)
    except openai.OpenAIError as e:
        raise SubmissionError(f"Fine-tuning job was rejected: {e}") from e

    logger.info("Fine-tuning job created. Job ID: %s", job.id)
    return job.id
