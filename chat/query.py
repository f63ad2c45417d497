"""
Send a single prompt to a model and return its answer.
"""

import logging

import openai

from config import DEFAULT_TEMPERATURE
from errors import CompletionError, PreconditionError

logger = logging.getLogger(__name__)


def ask_model(client, query: str, model: str, temperature: float = DEFAULT_TEMPERATURE) -> str:
    """
    Ask a model one question.

    Every call goes to the API; nothing is cached.

    Args:
        client: OpenAI client
        query: The prompt sent as a single user message
        model: Base or fine-tuned model ID
        temperature: Sampling temperature (default 0, deterministic)

    Returns:
        Text content of the first choice

    Raises:
        PreconditionError: If the query is empty
        CompletionError: If the request fails or returns no choices
    """
    if not query:
        raise PreconditionError("A query to test the model must be provided.")

    logger.debug("Asking %s (temperature=%s)", model, temperature)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "user", "content": query}
            ],
            temperature=temperature,
        )
    except openai.OpenAIError as e:
        raise CompletionError(f"Completion request to {model} failed: {e}") from e

    if not response.choices:
        raise CompletionError(f"Model {model} returned no choices")

    return response.choices[0].message.content
