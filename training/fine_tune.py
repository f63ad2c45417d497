"""
Fine-tune an OpenAI model and optionally query it.

This script:
1. Uploads the training and validation JSONL files to OpenAI
2. Creates a fine-tuning job on the configured base model
3. Monitors job progress until completion (Ctrl+C during upload skips job
   creation; during monitoring it stops watching the job)
4. Asks the fine-tuned model a question, if one was given

Usage:
    python -m training.fine_tune train.jsonl valid.jsonl
    python -m training.fine_tune train.jsonl valid.jsonl --query "What color is the sky?"
    python -m training.fine_tune --dry-run train.jsonl valid.jsonl
"""

import argparse
import logging
import signal
import sys
import threading
from dataclasses import replace

from config import load_settings
from errors import FineTuningError
from openai_helper import OpenAIHelper
from training.estimate_cost import print_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fine-tune an OpenAI model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m training.fine_tune train.jsonl valid.jsonl
  python -m training.fine_tune train.jsonl valid.jsonl --query "Hello"
  python -m training.fine_tune --dry-run train.jsonl valid.jsonl
        """
    )
    parser.add_argument("training_file", help="Path to the training JSONL file")
    parser.add_argument("validation_file", help="Path to the validation JSONL file")
    parser.add_argument("--query", help="Question to ask the fine-tuned model")
    parser.add_argument("--model", help="Base model to fine-tune (default: OPENAI_MODEL)")
    parser.add_argument("--suffix", help="Suffix added to the fine-tuned model name")
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between status checks (default: 30)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show token counts and estimated cost without making API calls"
    )
    return parser


def main(argv=None):
    """Run the fine-tuning workflow from the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    if args.dry_run:
        print("=" * 60)
        print("DRY RUN - No API calls will be made")
        print("=" * 60)
        print()
        print_summary([args.training_file, args.validation_file])
        print()
        print("To proceed with fine-tuning, run without --dry-run flag.")
        return 0

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.model:
        settings = replace(settings, model=args.model)
    if args.poll_interval is not None:
        settings = replace(settings, poll_interval=args.poll_interval)

    helper = OpenAIHelper(settings)

    # Ctrl+C before submission skips creating the job; after it, monitoring
    # stops and the job keeps running on OpenAI's side
    cancel_event = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: cancel_event.set())

    print("=" * 60)
    print(f"OpenAI Fine-Tuning: {settings.model}")
    print("=" * 60)

    try:
        result = helper.initiate_fine_tuning(
            args.training_file,
            args.validation_file,
            suffix=args.suffix,
            sleep=cancel_event.wait,
            cancel_event=cancel_event,
        )
    except FineTuningError as e:
        print(f"\n✗ Error: {e}")
        return 1
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if result.status == "cancelled" and result.job_id is None:
        print("\nCancelled. No fine-tuning job was created.")
        return 1

    if result.status == "cancelled":
        print(f"\nStopped monitoring. Job {result.job_id} is still running on OpenAI.")
        return 1

    if not result.succeeded:
        print(f"\n✗ Fine-tuning {result.status}. Job ID: {result.job_id}")
        return 1

    print(f"\n✓ Fine-tuning complete! Model ID: {result.fine_tuned_model}")

    if args.query:
        try:
            answer = helper.ask_model(args.query, result.fine_tuned_model)
        except FineTuningError as e:
            print(f"\n✗ Error: {e}")
            return 1
        print(f"\n{answer}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
