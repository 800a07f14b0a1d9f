"""Browser helpers for launching Chromium and opening per-pair contexts."""

from __future__ import annotations

from playwright.async_api import Browser, BrowserContext, Playwright


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch the single Chromium instance shared by every pair of a run."""
    return await playwright.chromium.launch(headless=headless)


async def create_compare_context(
    browser: Browser,
    viewport: dict,
    auth_header: str,
) -> BrowserContext:
    """Create an isolated browser context for one URL pair.

    Every request made from the context carries the shared Basic
    ``Authorization`` header.
    """
    return await browser.new_context(
        viewport=viewport,
        extra_http_headers={"Authorization": auth_header},
    )
