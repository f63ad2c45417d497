"""
Model training module for OpenAI fine-tuning.

This module handles:
- Training file upload (upload.py)
- Fine-tuning job creation (jobs.py) and monitoring (monitor.py)
- The end-to-end workflow (workflow.py, fine_tune.py)
- Cost estimation (estimate_cost.py)
"""
