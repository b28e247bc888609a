from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from .config import ReportConfig
from .schema import BrandingAssetError
from .styles import DEFAULT_FONTS, PALETTE, FontSet
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


class BrandingProvider(Protocol):
    async def draw(self, surface: DrawingSurface, margin: float) -> float:
        """Draw the branding block at the top of the first page; return the height reserved."""
        ...


class WordmarkBranding:
    """Text wordmark used when no logo image is configured."""

    height = 15.0

    def __init__(self, lab_name: str, fonts: FontSet = DEFAULT_FONTS):
        self.lab_name = lab_name
        self.fonts = fonts

    async def draw(self, surface: DrawingSurface, margin: float) -> float:
        surface.set_font(self.fonts.bold, 11)
        surface.set_text_color(PALETTE.text_secondary)
        surface.text(self.lab_name.upper(), surface.page_width / 2, margin, align="center")
        surface.set_stroke_color(PALETTE.divider)
        surface.set_line_width(0.3)
        surface.line(margin, margin + 4, surface.page_width - margin, margin + 4)
        return self.height


class LogoBranding:
    """Logo image centred at the top margin, read off the event loop."""

    def __init__(self, path: Path, width: float, height: float):
        self.path = Path(path)
        self.width = width
        self.height = height

    async def _load(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise BrandingAssetError(f"Cannot read logo {self.path}: {exc}") from exc

    async def draw(self, surface: DrawingSurface, margin: float) -> float:
        data = await self._load()
        x = (surface.page_width - self.width) / 2
        top = margin - 10
        try:
            surface.image(data, x, top, self.width, self.height)
        except (OSError, ValueError) as exc:
            raise BrandingAssetError(f"Cannot decode logo {self.path}: {exc}") from exc
        logger.debug("Drew logo %s (%.1fx%.1fmm)", self.path, self.width, self.height)
        return top + self.height + 5 - margin


def branding_from_config(config: ReportConfig, fonts: FontSet = DEFAULT_FONTS) -> BrandingProvider:
    if config.logo_path is not None:
        return LogoBranding(config.logo_path, config.logo_width, config.logo_height)
    return WordmarkBranding(config.lab_name, fonts)
