"""Tests for the pair processor: capture order, artifacts and cleanup."""

import asyncio
import re
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from pagediff.executor.pair_processor import PairProcessor
from pagediff.imaging.diff_engine import diff_images
from pagediff.models.pairs import UrlPair

TO_THREAD = "pagediff.executor.pair_processor.asyncio.to_thread"

LIVE = "https://a.example/x"
DEV = "https://b.example/x"


class TestPairProcessorNoDiff:
    """Identical renders produce no result and no files."""

    @pytest.mark.asyncio
    async def test_returns_none(self, compare_config, page_image, png_bytes, mock_browser_factory):
        shot = png_bytes(page_image(40, 80))
        browser = mock_browser_factory({LIVE: shot, DEV: shot})
        processor = PairProcessor(compare_config, browser, "Basic abc")

        result = await processor.process(UrlPair(live=LIVE, dev=DEV), 0)

        assert result is None
        assert not Path(compare_config.output_dir).exists()
        browser.contexts_created[0].close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dev_captured_before_live(self, compare_config, page_image, png_bytes,
                                            mock_browser_factory):
        shot = png_bytes(page_image(10, 10))
        browser = mock_browser_factory({LIVE: shot, DEV: shot})
        processor = PairProcessor(compare_config, browser, "Basic abc")

        await processor.process(UrlPair(live=LIVE, dev=DEV), 0)

        visited = [p.goto.await_args.args[0] for p in browser.pages_created]
        assert visited == [DEV, LIVE]
        assert len(browser.contexts_created) == 1
        for page in browser.pages_created:
            page.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_diff_runs_in_worker_thread(self, compare_config, page_image, png_bytes,
                                              mock_browser_factory):
        shot = png_bytes(page_image(10, 10))
        browser = mock_browser_factory({LIVE: shot, DEV: shot})
        processor = PairProcessor(compare_config, browser, "Basic abc")

        with patch(TO_THREAD, wraps=asyncio.to_thread) as to_thread:
            result = await processor.process(UrlPair(live=LIVE, dev=DEV), 0)

        assert result is None
        to_thread.assert_awaited_once()
        assert to_thread.await_args.args[0] is diff_images
        assert to_thread.await_args.kwargs["threshold"] == 0.1


class TestPairProcessorDiffFound:
    """Differing renders persist three artifacts and return a DiffResult."""

    @pytest.mark.asyncio
    async def test_banner_difference(self, compare_config, page_image, png_bytes,
                                     mock_browser_factory):
        browser = mock_browser_factory({
            LIVE: png_bytes(page_image(64, 200)),
            DEV: png_bytes(page_image(64, 200, banner_height=50)),
        })
        processor = PairProcessor(compare_config, browser, "Basic abc")
        pair = UrlPair(live=LIVE, dev=DEV, dev_browser="webkit")

        result = await processor.process(pair, 4)

        assert result is not None
        assert result.index == 4
        assert result.live == LIVE
        assert result.dev == DEV
        assert result.dev_browser == "webkit"
        assert result.message == "Differences found"
        assert result.differing_pixels > 0
        assert re.search(r"diff-5-\d+\.png$", result.diff_path)

        out = Path(compare_config.output_dir)
        names = sorted(p.name for p in out.iterdir())
        assert len(names) == 3
        assert "dev-5.png" in names and "live-5.png" in names

        with Image.open(result.dev_path) as dev, Image.open(result.live_path) as live:
            assert dev.size == live.size == (64, 250)
        browser.contexts_created[0].close.assert_awaited_once()


class TestPairProcessorFailure:
    """Errors propagate but the context is still released."""

    @pytest.mark.asyncio
    async def test_navigation_error_propagates(self, compare_config, page_image, png_bytes,
                                               mock_browser_factory):
        browser = mock_browser_factory(
            {DEV: png_bytes(page_image(4, 4))},
            failures={LIVE: RuntimeError("net::ERR_NAME_NOT_RESOLVED")},
        )
        processor = PairProcessor(compare_config, browser, "Basic abc")

        with pytest.raises(RuntimeError, match="ERR_NAME_NOT_RESOLVED"):
            await processor.process(UrlPair(live=LIVE, dev=DEV), 0)

        browser.contexts_created[0].close.assert_awaited_once()
        assert not Path(compare_config.output_dir).exists()
