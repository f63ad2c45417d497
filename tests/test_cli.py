import signal
from types import SimpleNamespace

import pytest

import chat.single
import run
import training.fine_tune
from config import Settings
from openai_helper import OpenAIHelper
from training.estimate_cost import count_file_tokens, estimate_cost, print_summary

from conftest import make_job


@pytest.fixture
def patched_helper(monkeypatch, fake_client):
    """Make the CLI modules build an OpenAIHelper around the fake client."""
    settings = Settings(api_key="sk-test", poll_interval=0)

    def build(settings):
        return OpenAIHelper(settings, client=fake_client)

    for module in (training.fine_tune, chat.single):
        monkeypatch.setattr(module, "load_settings", lambda: settings)
        monkeypatch.setattr(module, "OpenAIHelper", build)
    return fake_client


def test_count_file_tokens_skips_blank_lines(jsonl_files):
    training, _ = jsonl_files
    training.write_text(training.read_text() + "\n", encoding="utf-8")

    tokens, examples = count_file_tokens(training, counter=lambda text: 10)

    assert (tokens, examples) == (30, 3)


def test_estimate_cost():
    assert estimate_cost(1_000_000, 2) == 10.0
    assert estimate_cost(500_000, 1, cost_per_million=3.0) == 1.5


def test_print_summary_reports_missing_files(jsonl_files, tmp_path, capsys):
    training, _ = jsonl_files

    total = print_summary([training, tmp_path / "missing.jsonl"], counter=lambda text: 7)

    assert total == 21
    out = capsys.readouterr().out
    assert "(file not found)" in out
    assert "3 epochs" in out


def test_dry_run_makes_no_api_calls(monkeypatch, jsonl_files):
    summarized = []
    monkeypatch.setattr(training.fine_tune, "print_summary", summarized.append)
    monkeypatch.setattr(training.fine_tune, "load_settings",
                        lambda: pytest.fail("dry run must not load credentials"))

    assert training.fine_tune.main(["--dry-run", *map(str, jsonl_files)]) == 0
    assert summarized == [[str(jsonl_files[0]), str(jsonl_files[1])]]


def test_fine_tune_cli_reports_model_and_answer(patched_helper, jsonl_files, capsys):
    patched_helper.fine_tuning.jobs.retrieve.return_value = make_job("succeeded", fine_tuned_model="ft:abc123")

    code = training.fine_tune.main([*map(str, jsonl_files), "--query", "What color is the sky?"])

    assert code == 0
    out = capsys.readouterr().out
    assert "ft:abc123" in out
    assert "Blue." in out


def test_dry_run_summarizes_both_files(monkeypatch, jsonl_files, capsys):
    monkeypatch.setattr(training.fine_tune, "print_summary",
                        lambda files: print_summary(files, counter=lambda text: 10))

    assert training.fine_tune.main(["--dry-run", *map(str, jsonl_files)]) == 0

    out = capsys.readouterr().out
    assert "train.jsonl" in out
    assert "valid.jsonl" in out
    assert "40" in out


def test_ctrl_c_during_upload_creates_no_job(patched_helper, jsonl_files, capsys):
    def upload_then_interrupt(file, purpose):
        signal.raise_signal(signal.SIGINT)
        return SimpleNamespace(id="file-train")

    patched_helper.files.create.side_effect = upload_then_interrupt
    previous_handler = signal.getsignal(signal.SIGINT)

    assert training.fine_tune.main([*map(str, jsonl_files)]) == 1

    patched_helper.fine_tuning.jobs.create.assert_not_called()
    assert patched_helper.files.create.call_count == 1
    assert "No fine-tuning job was created" in capsys.readouterr().out
    assert signal.getsignal(signal.SIGINT) is previous_handler


def test_fine_tune_cli_failed_job_exits_nonzero(patched_helper, jsonl_files, capsys):
    patched_helper.fine_tuning.jobs.retrieve.return_value = make_job("failed")

    assert training.fine_tune.main([*map(str, jsonl_files)]) == 1
    assert "failed" in capsys.readouterr().out


def test_fine_tune_cli_upload_error_exits_nonzero(patched_helper, tmp_path, capsys):
    code = training.fine_tune.main([str(tmp_path / "a.jsonl"), str(tmp_path / "b.jsonl")])

    assert code == 1
    assert "Error" in capsys.readouterr().out


def test_chat_cli_prints_answer(patched_helper, capsys):
    assert chat.single.main(["What color is the sky?", "--model", "ft:abc123"]) == 0

    assert capsys.readouterr().out.strip() == "Blue."
    assert patched_helper.chat.completions.create.call_args.kwargs["model"] == "ft:abc123"


def test_chat_cli_missing_key(monkeypatch, capsys):
    def missing():
        raise ValueError("OPENAI_API_KEY environment variable not set.")

    monkeypatch.setattr(chat.single, "load_settings", missing)

    assert chat.single.main(["Hello"]) == 1
    assert "OPENAI_API_KEY" in capsys.readouterr().out


def test_runner_dispatches_documented_commands(monkeypatch):
    assert run.COMMANDS == {
        "cost": "training.estimate_cost",
        "train": "training.fine_tune",
        "ask": "chat.single",
    }

    dispatched = []
    monkeypatch.setattr(run, "run_module", lambda module, args: dispatched.append((module, args)))
    monkeypatch.setattr(run.sys, "argv", ["run.py", "ask", "Hello", "--model", "ft:abc123"])

    run.main()

    assert dispatched == [("chat.single", ["Hello", "--model", "ft:abc123"])]
