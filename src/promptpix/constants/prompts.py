"""Prompt suggestions and writing tips shown by the `tips` command."""

from typing import Final

PROMPT_SUGGESTIONS: Final[tuple[str, ...]] = (
    "A serene Japanese garden with cherry blossoms",
    "Futuristic cityscape at sunset",
    "Abstract representation of human emotions",
    "Underwater scene with bioluminescent creatures",
    "Steampunk-inspired mechanical butterfly",
)

PROMPT_TIPS: Final[tuple[str, ...]] = (
    "Be specific about the style you want (e.g., oil painting, digital art, photography)",
    "Include details about lighting, colors, and mood",
    "Specify the perspective or angle you want",
    "Mention any particular artistic influences",
    "Include details about the setting and environment",
)
