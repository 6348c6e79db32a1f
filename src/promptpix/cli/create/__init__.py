"""Create feature - image generation and posting commands."""

from .commands import create, generate, tips
from .params import GenerateParams

__all__ = ["create", "generate", "tips", "GenerateParams"]
