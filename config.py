"""
Configuration for the OpenAI fine-tuning helper.

Module-level constants hold the defaults. Credentials and the model name are
read once, at process start, by load_settings() and handed to the client
wrapper as a Settings object.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

# ============================================================================
# OpenAI Model Configuration
# ============================================================================
# Base model to fine-tune from (and to query when no model is given)
DEFAULT_MODEL = "gpt-4o-mini-2024-07-18"

# Purpose tag sent with every uploaded training/validation file
FILE_PURPOSE = "fine-tune"

# Cost per million tokens for training (USD) - used for dry-run estimates
TRAINING_COST_PER_MILLION_TOKENS = 5.00

# Token counting model (should match fine-tune base model for accuracy)
TOKEN_MODEL = "gpt-4o-mini"

# ============================================================================
# Fine-Tuning Hyperparameters
# ============================================================================
# Set to None to use OpenAI's auto-selected defaults
N_EPOCHS = None
BATCH_SIZE = None
LEARNING_RATE_MULTIPLIER = None

# ============================================================================
# Job Monitoring
# ============================================================================
# Seconds between two status checks of a running job
POLL_INTERVAL_SECONDS = 30

# Number of most recent job events shown per status check
EVENT_LIMIT = 5

# ============================================================================
# Chat Settings
# ============================================================================
# 0 = deterministic/greedy
DEFAULT_TEMPERATURE = 0


def get_hyperparameters() -> dict:
    """
    Build the hyperparameters dict from the constants above.

    Returns:
        Only the hyperparameters that are set; empty dict means OpenAI defaults
    """
    hyperparameters = {}

    if N_EPOCHS is not None:
        hyperparameters["n_epochs"] = N_EPOCHS

    if BATCH_SIZE is not None:
        hyperparameters["batch_size"] = BATCH_SIZE

    if LEARNING_RATE_MULTIPLIER is not None:
        hyperparameters["learning_rate_multiplier"] = LEARNING_RATE_MULTIPLIER

    return hyperparameters


@dataclass(frozen=True)
class Settings:
    """Explicit configuration passed to OpenAIHelper."""
    api_key: str
    model: str = DEFAULT_MODEL
    poll_interval: float = POLL_INTERVAL_SECONDS
    event_limit: int = EVENT_LIMIT
    temperature: float = DEFAULT_TEMPERATURE
    hyperparameters: dict = field(default_factory=get_hyperparameters)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Load settings from the process environment (and a .env file, if present).

    Args:
        environ: Mapping to read instead of os.environ (the .env file is
            still loaded into os.environ, but not consulted)

    Returns:
        Settings with the API key and model name filled in

    Raises:
        ValueError: If OPENAI_API_KEY is not set
    """
    load_dotenv()
    if environ is None:
        environ = os.environ

    api_key = environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ValueError(
            "OPENAI_API_KEY environment variable not set. "
            "Please create a .env file from .env.example and add your API key."
        )

    return Settings(
        api_key=api_key,
        model=environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
    )
