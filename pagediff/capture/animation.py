"""Removes frame-to-frame variance before a screenshot."""

from __future__ import annotations

import logging

from playwright.async_api import Page

logger = logging.getLogger(__name__)

# Loaded GIFs are swapped right away; pending ones on their first load event.
# Images whose load never fires keep their animated source.
_REPLACE_GIFS_SCRIPT = """(template) => {
    const placeholder = (img) => template
        .replace('{width}', String(img.naturalWidth))
        .replace('{height}', String(img.naturalHeight));

    const gifs = document.querySelectorAll('img[src$=".gif"]');
    let replaced = 0;
    gifs.forEach((gif) => {
        if (gif.complete && gif.naturalWidth !== 0) {
            gif.src = placeholder(gif);
            replaced += 1;
        } else {
            gif.addEventListener('load', () => {
                gif.src = placeholder(gif);
            }, { once: true });
        }
    });
    return { total: gifs.length, replaced: replaced };
}"""

DISABLE_ANIMATIONS_CSS = "* { animation: none !important; }"


async def freeze_animations(
    page: Page,
    placeholder_url: str = "https://placehold.co/{width}x{height}",
    settle_delay_ms: int = 1000,
) -> None:
    """Replace GIFs with same-size placeholders and disable CSS animations.

    Waits ``settle_delay_ms`` afterwards so pending image loads and
    substitutions land before the caller captures the page.
    """
    stats = await page.evaluate(_REPLACE_GIFS_SCRIPT, placeholder_url)
    if stats:
        logger.debug("  GIFs on page: %d (%d replaced immediately)",
                     stats.get("total", 0), stats.get("replaced", 0))

    await page.add_style_tag(content=DISABLE_ANIMATIONS_CSS)
    await page.wait_for_timeout(settle_delay_ms)
