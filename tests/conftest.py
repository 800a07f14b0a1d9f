"""Pytest configuration and shared fixtures."""

import io
from typing import Callable
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from pagediff.models.config import BasicAuthConfig, CompareConfig, ViewportConfig
from pagediff.models.pairs import UrlPair


# ============================================================================
# Image Helpers
# ============================================================================


def make_page_image(
    width: int = 64,
    height: int = 96,
    background: tuple = (255, 255, 255, 255),
    banner_height: int = 0,
    banner_color: tuple = (30, 60, 200, 255),
) -> Image.Image:
    """Create a simple page render, optionally with a banner across the top."""
    image = Image.new("RGBA", (width, height + banner_height), background)
    if banner_height:
        image.paste(Image.new("RGBA", (width, banner_height), banner_color), (0, 0))
    return image


def to_png(image: Image.Image) -> bytes:
    """Encode an image the way a full-page screenshot arrives."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def page_image() -> Callable[..., Image.Image]:
    """Fixture that provides the make_page_image function."""
    return make_page_image


@pytest.fixture
def png_bytes() -> Callable[[Image.Image], bytes]:
    """Fixture that provides the to_png function."""
    return to_png


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def compare_config(tmp_path) -> CompareConfig:
    """Create a comparison config writing artifacts under tmp_path."""
    return CompareConfig(
        viewport=ViewportConfig(width=1280, height=720),
        auth=BasicAuthConfig(username="admin", password="password"),
        settle_delay_ms=0,
        output_dir=str(tmp_path / "diffs"),
    )


@pytest.fixture
def url_pair() -> UrlPair:
    return UrlPair(live="https://a.example/x", dev="https://b.example/x")


# ============================================================================
# Mock Fixtures
# ============================================================================


def make_mock_page(screenshots: dict[str, bytes], failures: dict[str, Exception] | None = None,
                   statuses: dict[str, int] | None = None) -> AsyncMock:
    """Create a mock Playwright page whose screenshot depends on the URL it loaded."""
    failures = failures or {}
    statuses = statuses or {}
    state: dict[str, str] = {}
    page = AsyncMock()
    page.on = Mock()

    async def goto(url, **kwargs):
        state["url"] = url
        if url in failures:
            raise failures[url]
        return Mock(status=statuses.get(url, 200))

    async def screenshot(**kwargs):
        return screenshots[state["url"]]

    page.goto = AsyncMock(side_effect=goto)
    page.screenshot = AsyncMock(side_effect=screenshot)
    page.evaluate = AsyncMock(return_value={"total": 0, "replaced": 0})
    page.add_style_tag = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.close = AsyncMock()
    return page


def make_mock_browser(screenshots: dict[str, bytes], failures: dict[str, Exception] | None = None,
                      statuses: dict[str, int] | None = None) -> AsyncMock:
    """Create a mock browser; every context and page it hands out is recorded."""
    browser = AsyncMock()
    browser.contexts_created = []
    browser.pages_created = []

    async def new_context(**kwargs):
        context = AsyncMock()
        context.kwargs = kwargs

        async def new_page():
            page = make_mock_page(screenshots, failures, statuses)
            browser.pages_created.append(page)
            return page

        context.new_page = AsyncMock(side_effect=new_page)
        context.close = AsyncMock()
        browser.contexts_created.append(context)
        return context

    browser.new_context = AsyncMock(side_effect=new_context)
    browser.close = AsyncMock()
    return browser


@pytest.fixture
def mock_browser_factory() -> Callable[..., AsyncMock]:
    """Fixture that provides the make_mock_browser function."""
    return make_mock_browser


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page with a 1x1 white screenshot."""
    return make_mock_page({"https://example.com": to_png(make_page_image(1, 1))})
