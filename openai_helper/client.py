"""
OpenAIHelper - a small wrapper around the OpenAI client.

Binds a Settings object to an OpenAI client and exposes the upload,
job creation, monitoring and query operations with the configured defaults.
"""

from typing import Optional

from openai import OpenAI

from config import Settings
from chat.query import ask_model
from training.jobs import create_fine_tuning_job
from training.monitor import JobMonitor
from training.upload import upload_file
from training.workflow import FineTuneResult, initiate_fine_tuning


class OpenAIHelper:
    """
    Wrapper for fine-tuning and querying OpenAI models.

    Args:
        settings: API key, default model and monitoring defaults
        client: Existing OpenAI client to use instead of creating one
    """

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.client = client if client is not None else OpenAI(api_key=settings.api_key)

    @property
    def model(self) -> str:
        return self.settings.model

    def upload_file(self, filepath) -> str:
        return upload_file(self.client, filepath)

    def create_fine_tuning_job(self, training_file_id: str, validation_file_id: Optional[str] = None,
                               model: Optional[str] = None, suffix: Optional[str] = None) -> str:
        return create_fine_tuning_job(
            self.client,
            training_file_id,
            validation_file_id,
            model=model or self.model,
            hyperparameters=self.settings.hyperparameters,
            suffix=suffix,
        )

    def monitor_job(self, job_id: str, **options):
        """Poll job_id until it reaches a terminal status and return the job."""
        return JobMonitor(self.client, job_id, **self._monitor_options(options)).run()

    def ask_model(self, query: str, model: Optional[str] = None, temperature: Optional[float] = None) -> str:
        """Ask a model (default: the configured model) one question."""
        return ask_model(
            self.client,
            query,
            model=model or self.model,
            temperature=self.settings.temperature if temperature is None else temperature,
        )

    def initiate_fine_tuning(self, training_path, validation_path, suffix: Optional[str] = None,
                             **options) -> FineTuneResult:
        """Upload both files, fine-tune the configured model and wait for the result."""
        return initiate_fine_tuning(
            self.client,
            training_path,
            validation_path,
            model=self.model,
            hyperparameters=self.settings.hyperparameters,
            suffix=suffix,
            **self._monitor_options(options),
        )

    def _monitor_options(self, options: dict) -> dict:
        merged = {
            "poll_interval": self.settings.poll_interval,
            "event_limit": self.settings.event_limit,
        }
        merged.update(options)
        return merged
