"""Shared helpers."""

from hrbench.utils.logging import setup_file_logger

__all__ = ["setup_file_logger"]
