"""Utility helpers."""

from euler_sequences.utils.log import setup_logger

__all__ = ["setup_logger"]
