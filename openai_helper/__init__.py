"""
OpenAI fine-tuning helper.

This module handles:
- Wrapping the OpenAI client with explicit settings (client.py)
"""

from openai_helper.client import OpenAIHelper

__all__ = ["OpenAIHelper"]
