"""Utility helpers."""

from .files import download_image, generate_filename

__all__ = ["download_image", "generate_filename"]
