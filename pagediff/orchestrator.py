"""Drives the pair processor over every URL pair in chunks."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterator

from playwright.async_api import Browser, async_playwright

from pagediff.executor.pair_processor import PairProcessor
from pagediff.models.config import CompareConfig
from pagediff.models.pairs import UrlPair
from pagediff.models.result import PairFailure, PairOutcome, RunSummary
from pagediff.utils.browser import launch_browser

logger = logging.getLogger(__name__)


def iter_chunks(pairs: list[UrlPair], size: int) -> Iterator[tuple[int, list[UrlPair]]]:
    """Yield (start index, chunk) slices of at most ``size`` pairs, in order."""
    for start in range(0, len(pairs), size):
        yield start, pairs[start:start + size]


class Orchestrator:
    """Coordinates one comparison run over an ordered list of URL pairs."""

    def __init__(self, config: CompareConfig):
        self.config = config
        # Built once and reused by every browser context of the run
        self.auth_header = config.auth.header_value()

    def run(self, pairs: list[UrlPair]) -> RunSummary:
        """Launch the browser, compare every pair and return the run summary."""
        return asyncio.run(self._run(pairs))

    async def _run(self, pairs: list[UrlPair]) -> RunSummary:
        async with async_playwright() as p:
            logger.debug("Launching Chromium (headless=%s)...", self.config.headless)
            browser = await launch_browser(p, headless=self.config.headless)
            try:
                return await self.compare(browser, pairs)
            finally:
                await browser.close()

    async def compare(self, browser: Browser, pairs: list[UrlPair]) -> RunSummary:
        """Process ``pairs`` chunk by chunk against an already launched browser.

        Chunks run strictly one after another; pairs inside a chunk run
        concurrently. Outcomes are collected in input order.
        """
        started_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        start_time = time.time()
        summary = RunSummary(started_at=started_at, total_pairs=len(pairs))
        processor = PairProcessor(self.config, browser, self.auth_header)
        chunk_size = self.config.chunk_size
        total_chunks = (len(pairs) + chunk_size - 1) // chunk_size

        logger.info("Comparing %d URL pairs in chunks of %d", len(pairs), chunk_size)
        for chunk_number, (start, chunk) in enumerate(iter_chunks(pairs, chunk_size), 1):
            logger.debug("--- Chunk %d/%d: pairs %d-%d ---", chunk_number, total_chunks,
                         start + 1, start + len(chunk))
            outcomes = await self._run_chunk(processor, chunk, start)
            for outcome in outcomes:
                summary.add(outcome)

        summary.completed_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        summary.duration_seconds = round(time.time() - start_time, 2)
        logger.info(
            "Comparison complete: %d identical, %d different, %d failed (%.1fs)",
            summary.identical, len(summary.differences), len(summary.failures),
            summary.duration_seconds,
        )
        return summary

    async def _run_chunk(self, processor: PairProcessor, chunk: list[UrlPair],
                         start: int) -> list[PairOutcome]:
        """Run every pair of a chunk concurrently; outcomes come back in chunk order.

        If one pair raises, its unfinished siblings are cancelled and awaited
        before the error is re-raised.
        """
        tasks = [
            asyncio.create_task(self._run_one(processor, pair, start + j))
            for j, pair in enumerate(chunk)
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.debug("Cancelling %d unfinished pairs of the chunk", len(pending))
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run_one(self, processor: PairProcessor, pair: UrlPair, index: int) -> PairOutcome:
        if not self.config.isolate_failures:
            return await processor.process(pair, index)
        try:
            return await processor.process(pair, index)
        except Exception as e:
            logger.error("[%d] Comparison failed: %s", index + 1, e)
            logger.debug("[%d] Failure details", index + 1, exc_info=True)
            return PairFailure(
                index=index,
                live=pair.live,
                dev=pair.dev,
                dev_browser=pair.dev_browser,
                error=str(e) or type(e).__name__,
            )
