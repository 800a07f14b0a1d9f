"""Navigates a page, freezes it and takes a full-page raster."""

from __future__ import annotations

import io
import logging

from PIL import Image
from playwright.async_api import Browser, BrowserContext

from pagediff.models.config import CompareConfig
from pagediff.utils.browser import create_compare_context

from .animation import freeze_animations

logger = logging.getLogger(__name__)


def decode_png(data: bytes) -> Image.Image:
    """Decode screenshot bytes into an RGBA raster."""
    with Image.open(io.BytesIO(data)) as img:
        return img.convert("RGBA")


class PageCapturer:
    """Captures full-page screenshots using a shared Authorization header."""

    def __init__(self, config: CompareConfig, auth_header: str):
        self.config = config
        self.auth_header = auth_header

    async def open_context(self, browser: Browser) -> BrowserContext:
        viewport = {"width": self.config.viewport.width, "height": self.config.viewport.height}
        return await create_compare_context(browser, viewport, self.auth_header)

    async def capture(self, context: BrowserContext, url: str) -> Image.Image:
        """Load ``url`` in a fresh page of ``context`` and return its full-page image.

        Navigation errors (timeout, DNS, TLS) and HTTP error statuses
        propagate to the caller.
        """
        page = await context.new_page()
        try:
            logger.debug("  Navigating to %s", url)
            response = await page.goto(url, wait_until="networkidle",
                                       timeout=self.config.navigation_timeout_ms)
            if response is not None and response.status >= 400:
                raise RuntimeError(f"HTTP {response.status} loading {url}")
            await freeze_animations(
                page,
                placeholder_url=self.config.placeholder_url,
                settle_delay_ms=self.config.settle_delay_ms,
            )
            screenshot = await page.screenshot(full_page=True)
        finally:
            await page.close()

        image = decode_png(screenshot)
        logger.debug("  Captured %s (%dx%d)", url, image.width, image.height)
        return image
