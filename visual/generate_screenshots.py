"""
Screenshot Generator Module
Captures full-page screenshots of web pages using Playwright.
"""

import logging
from pathlib import Path
from typing import Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from core.errors import CaptureError
from utils.file_utils import ensure_directory, normalize_path

logger = logging.getLogger(__name__)


def to_url(target: str) -> str:
    """Turn an existing local path into a file:// URL, leave anything else as is."""
    path = Path(target)
    try:
        if path.exists():
            return normalize_path(path).as_uri()
    except OSError:
        pass  # Not a usable path, e.g. too long for the filesystem
    return target


class ScreenshotGenerator:
    """
    Browser session for page captures.

    Use as a context manager; the browser is launched on entry and closed on
    every exit path:

        with ScreenshotGenerator() as generator:
            generator.capture_screenshot("https://example.com", "output/urlA.png")
    """

    def __init__(self,
                 wait_until: str = 'networkidle',
                 timeout_ms: int = 30000,
                 viewport: Tuple[int, int] = (800, 600),
                 browser: str = 'chromium'):
        self.wait_until = wait_until
        self.timeout_ms = timeout_ms
        self.viewport = viewport
        self.browser_type = browser
        self._playwright = None
        self.browser = None

    def __enter__(self) -> 'ScreenshotGenerator':
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def setup(self) -> None:
        """Start Playwright and launch a headless browser."""
        self._playwright = sync_playwright().start()
        try:
            self.browser = getattr(self._playwright, self.browser_type).launch()
        except Exception:
            self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(f"Launched headless {self.browser_type}")

    def close(self) -> None:
        """Close the browser and stop Playwright."""
        try:
            if self.browser is not None:
                self.browser.close()
        finally:
            self.browser = None
            if self._playwright is not None:
                self._playwright.stop()
                self._playwright = None

    def capture_screenshot(self, url: str, output_path: str | Path) -> Path:
        """Capture a full-page screenshot of url into output_path (PNG)."""
        if self.browser is None:
            raise RuntimeError("ScreenshotGenerator is not started; use it as a context manager")

        output_path = Path(output_path)
        ensure_directory(output_path.parent)
        width, height = self.viewport

        page = self.browser.new_page(viewport={'width': width, 'height': height})
        try:
            logger.info(f"Navigating to {url} (wait_until={self.wait_until})")
            page.goto(url, wait_until=self.wait_until, timeout=self.timeout_ms)
            page.screenshot(path=str(output_path), full_page=True)
        except PlaywrightError as e:
            raise CaptureError(url, e.message) from e
        finally:
            page.close()

        logger.info(f"Saved screenshot of {url} to {output_path}")
        return output_path
