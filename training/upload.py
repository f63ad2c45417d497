"""
Upload training and validation files to OpenAI.
"""

import logging
from pathlib import Path

import openai

from config import FILE_PURPOSE
from errors import PreconditionError, TransferError

logger = logging.getLogger(__name__)


def upload_file(client, filepath, purpose: str = FILE_PURPOSE) -> str:
    """
    Upload a local file to OpenAI and return its file ID.

    Args:
        client: OpenAI client
        filepath: Path to the JSONL file to upload
        purpose: Purpose tag for the upload (default: "fine-tune")

    Returns:
        File ID to reference in a fine-tuning job

    Raises:
        PreconditionError: If no path was given
        TransferError: If the file cannot be read or the upload is rejected
    """
    if not filepath:
        raise PreconditionError("A file path must be provided for upload.")

    filepath = Path(filepath)
    logger.info("Uploading %s...", filepath.name)
    try:
        with open(filepath, 'rb') as f:
            file = client.files.create(file=f, purpose=purpose)
    except OSError as e:
        raise TransferError(f"Could not read {filepath}: {e}", filepath) from e
    except openai.OpenAIError as e:
        raise TransferError(f"Upload of {filepath} was rejected: {e}", filepath) from e

    logger.info("Uploaded %s. File ID: %s", filepath.name, file.id)
    return file.id
