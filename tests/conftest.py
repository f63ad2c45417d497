from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from config import Settings
from openai_helper import OpenAIHelper


def make_job(status, job_id="ftjob-123", fine_tuned_model=None, trained_tokens=None, error=None):
    return SimpleNamespace(
        id=job_id,
        object="fine_tuning.job",
        status=status,
        fine_tuned_model=fine_tuned_model,
        trained_tokens=trained_tokens,
        error=error,
    )


def make_event(message, created_at=1700000000):
    return SimpleNamespace(object="fine_tuning.job.event", level="info", message=message, created_at=created_at)


def make_completion(*contents):
    return SimpleNamespace(
        choices=[
            SimpleNamespace(index=i, message=SimpleNamespace(role="assistant", content=content))
            for i, content in enumerate(contents)
        ]
    )


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_client():
    """OpenAI client stand-in; every API method is a MagicMock."""
    client = MagicMock()
    client.files.create.side_effect = [
        SimpleNamespace(id="file-train"),
        SimpleNamespace(id="file-valid"),
    ]
    client.fine_tuning.jobs.create.return_value = make_job("validating_files")
    client.fine_tuning.jobs.list_events.return_value = SimpleNamespace(data=[])
    client.chat.completions.create.return_value = make_completion("Blue.")
    return client


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(api_key="sk-test", model="gpt-4o-mini-2024-07-18", poll_interval=30)


@pytest.fixture
def helper(settings, fake_client):
    return OpenAIHelper(settings, client=fake_client)


@pytest.fixture
def jsonl_files(tmp_path):
    training = tmp_path / "train.jsonl"
    validation = tmp_path / "valid.jsonl"
    line = '{"messages": [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello"}]}\n'
    training.write_text(line * 3, encoding="utf-8")
    validation.write_text(line, encoding="utf-8")
    return training, validation
