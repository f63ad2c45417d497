"""
Ask a base or fine-tuned model a single question.

Usage:
    python -m chat.single "What color is the sky?"
    python -m chat.single "What color is the sky?" --model ft:gpt-4o-mini-2024-07-18:org::abc123
"""

import argparse
import logging
import sys

from config import load_settings
from errors import FineTuningError
from openai_helper import OpenAIHelper
from training.workflow import ask


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Query an OpenAI model")
    parser.add_argument("query", help="Question to ask the model")
    parser.add_argument("--model", help="Model ID (default: OPENAI_MODEL)")
    parser.add_argument(
        "--temperature",
        type=float,
        help="Sampling temperature (default: 0)"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    helper = OpenAIHelper(settings)

    try:
        answer = ask(helper, args.query, args.model, args.temperature)
    except FineTuningError as e:
        print(f"Error: {e}")
        return 1

    print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
