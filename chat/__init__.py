"""
Model querying module.

This module handles:
- Single chat completion requests (query.py)
- The command line query interface (single.py)
"""
