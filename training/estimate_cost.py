"""
Estimate training costs before fine-tuning.

Reads the training/validation JSONL files and calculates the estimated cost
based on token counts and the configured cost per million tokens.
No API calls are made.

Usage:
    python -m training.estimate_cost train.jsonl [valid.jsonl ...]
"""

import argparse
import json
from pathlib import Path

import tiktoken

from config import TOKEN_MODEL, TRAINING_COST_PER_MILLION_TOKENS


def count_tokens(text: str, model: str = TOKEN_MODEL) -> int:
    """
    Count tokens in a text string using tiktoken.

    Args:
        text: Text string to count tokens for
        model: OpenAI model name to use for encoding

    Returns:
        Number of tokens in the text
    """
    try:
        encoding = tiktoken.encoding_for_model(model)
    except KeyError:
        # Fallback to cl100k_base encoding if model not found
        encoding = tiktoken.get_encoding("cl100k_base")

    return len(encoding.encode(text))


def count_file_tokens(filepath: Path, counter=count_tokens) -> tuple:
    """
    Count tokens and examples in a JSONL file.

    Args:
        filepath: Path to the JSONL file
        counter: Function returning the token count of a string

    Returns:
        Tuple of (total_tokens, num_examples)
    """
    total_tokens = 0
    num_examples = 0

    with open(filepath, 'r', encoding='utf-8') as f:
        for line in f:
            if not line.strip():
                continue
            example = json.loads(line)
            # Count tokens the same way as OpenAI does (entire JSON string)
            example_json = json.dumps(example, ensure_ascii=False)
            total_tokens += counter(example_json)
            num_examples += 1

    return total_tokens, num_examples


def estimate_cost(tokens: int, epochs: int,
                  cost_per_million: float = TRAINING_COST_PER_MILLION_TOKENS) -> float:
    """Training cost in USD for `tokens` tokens trained for `epochs` epochs."""
    return (tokens * epochs / 1_000_000) * cost_per_million


def print_summary(filepaths: list, counter=count_tokens) -> int:
    """
    Print examples, tokens and estimated cost for each file.

    Returns:
        Total tokens across all files found
    """
    total_tokens = 0
    total_examples = 0

    print(f"{'File':<40} {'Examples':>10} {'Tokens':>12}")
    print("-" * 64)

    for filepath in filepaths:
        filepath = Path(filepath)
        if not filepath.exists():
            print(f"{filepath.name:<40} {'(file not found)':>23}")
            continue

        tokens, examples = count_file_tokens(filepath, counter)
        print(f"{filepath.name:<40} {examples:>10,} {tokens:>12,}")
        total_tokens += tokens
        total_examples += examples

    print("-" * 64)
    print(f"{'TOTAL':<40} {total_examples:>10,} {total_tokens:>12,}")
    print()

    print("Estimated Training Costs:")
    print("-" * 40)
    for epochs in [1, 2, 3]:
        cost = estimate_cost(total_tokens, epochs)
        print(f"  {epochs} epoch{'s' if epochs > 1 else ' '}: ${cost:.2f}")
    print()
    print(f"Cost per million tokens: ${TRAINING_COST_PER_MILLION_TOKENS:.2f}")
    print("Note: OpenAI auto-selects epochs based on dataset size (typically 1-3).")

    return total_tokens


def main():
    """Estimate training costs for the given files."""
    parser = argparse.ArgumentParser(description="Estimate fine-tuning costs")
    parser.add_argument("files", nargs="+", help="JSONL files to estimate")
    args = parser.parse_args()

    print("=" * 64)
    print("Training Cost Estimation")
    print("=" * 64)
    print()
    print_summary(args.files)


if __name__ == "__main__":
    main()
