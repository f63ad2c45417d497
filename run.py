#!/usr/bin/env python3
"""
Convenience runner for the OpenAI fine-tuning helper.

This script provides a simple interface to run all the main commands
without needing to remember the full module paths.

Usage:
    python run.py <command> [options]

Commands:
    cost        - Estimate fine-tuning costs for JSONL files
    train       - Fine-tune a model (use --dry-run for preview)
    ask         - Ask a model a single question
    help        - Show this help message

Examples:
    python run.py cost train.jsonl
    python run.py train train.jsonl valid.jsonl --dry-run
    python run.py train train.jsonl valid.jsonl --query "What color is the sky?"
    python run.py ask "What color is the sky?"
    python run.py ask "What color is the sky?" --model ft:gpt-4o-mini-2024-07-18:org::abc123
"""

import sys
import subprocess

COMMANDS = {
    "cost": "training.estimate_cost",
    "train": "training.fine_tune",
    "ask": "chat.single",
}


def show_help():
    """Display help message."""
    print(__doc__)


def run_module(module_path: str, extra_args: list = None):
    """Run a Python module with optional extra arguments."""
    cmd = [sys.executable, "-m", module_path]
    if extra_args:
        cmd.extend(extra_args)

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        show_help()
        sys.exit(0)

    command = sys.argv[1].lower()
    extra_args = sys.argv[2:]

    if command in ["help", "-h", "--help"]:
        show_help()
        sys.exit(0)

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"\nAvailable commands: {', '.join(COMMANDS)}, help")
        print("\nRun 'python run.py help' for more information.")
        sys.exit(1)

    run_module(COMMANDS[command], extra_args)


if __name__ == "__main__":
    main()
