"""Immutable parameter dataclasses for create commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...constants import ImageQuality, ImageSize, ImageStyle


@dataclass(frozen=True)
class GenerateParams:
    """Immutable parameters for an image generation request."""

    prompt: str
    size: str = ImageSize.SQUARE.value
    quality: str = ImageQuality.STANDARD.value
    style: str = ImageStyle.VIVID.value
    caption: Optional[str] = None
    save: bool = False
    output_dir: Path = Path(".")

    @classmethod
    def from_cli(
        cls,
        prompt: str,
        size: str,
        quality: str,
        style: str,
        caption: Optional[str] = None,
        save: bool = False,
        output_dir: Optional[Path] = None,
    ) -> "GenerateParams":
        """Create params from CLI arguments.

        Choice values are lowercased so `HD` and `hd` are both accepted.
        """
        return cls(
            prompt=prompt.strip(),
            size=size.strip().lower(),
            quality=quality.strip().lower(),
            style=style.strip().lower(),
            caption=caption,
            save=save,
            output_dir=output_dir or Path("."),
        )
