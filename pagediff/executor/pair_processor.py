"""Captures, reconciles and diffs one live/dev URL pair."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from playwright.async_api import Browser

from pagediff.capture.page_capturer import PageCapturer
from pagediff.imaging.diff_engine import diff_images
from pagediff.imaging.reconcile import reconcile
from pagediff.models.config import CompareConfig
from pagediff.models.pairs import UrlPair
from pagediff.models.result import DiffResult

from .artifacts import ArtifactStore

logger = logging.getLogger(__name__)

DIFF_MESSAGE = "Differences found"


class PairProcessor:
    """Runs the capture → reconcile → diff pipeline for a single pair.

    Failures while capturing or diffing are not handled here; they propagate
    to the caller. The browser context is closed on every path.
    """

    def __init__(self, config: CompareConfig, browser: Browser, auth_header: str):
        self.config = config
        self.browser = browser
        self.capturer = PageCapturer(config, auth_header)
        self.artifacts = ArtifactStore(Path(config.output_dir))

    async def process(self, pair: UrlPair, index: int) -> DiffResult | None:
        """Compare ``pair``; return a DiffResult when the renders differ, else None."""
        number = index + 1
        logger.info("Processing pair %d: %s vs %s", number, pair.live, pair.dev)

        context = await self.capturer.open_context(self.browser)
        try:
            logger.debug("  [%d] capturing dev", number)
            dev_image = await self.capturer.capture(context, pair.dev)
            logger.debug("  [%d] capturing live", number)
            live_image = await self.capturer.capture(context, pair.live)

            logger.debug("  [%d] reconciling %dx%d with %dx%d", number,
                         dev_image.width, dev_image.height,
                         live_image.width, live_image.height)
            padded = reconcile(dev_image, live_image, fill=self.config.pad_rgba)

            # Pixel work runs off the event loop so sibling pairs keep loading
            diff = await asyncio.to_thread(
                diff_images,
                padded.first, padded.second,
                threshold=self.config.threshold,
                diff_color=self.config.diff_color,
            )

            if diff.differing_pixels == 0:
                logger.info("[%d] No differences found", number)
                return None

            paths = self.artifacts.save(number, padded.first, padded.second, diff.image)
            logger.info("[%d] Differences found (%d pixels). Diff saved to: %s",
                        number, diff.differing_pixels, paths.diff)
            return DiffResult(
                index=index,
                live=pair.live,
                dev=pair.dev,
                dev_browser=pair.dev_browser,
                differing_pixels=diff.differing_pixels,
                diff_path=paths.diff,
                dev_path=paths.dev,
                live_path=paths.live,
                message=DIFF_MESSAGE,
            )
        finally:
            await context.close()
