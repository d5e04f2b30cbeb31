#!/usr/bin/env python3
"""
Playwright engine module.

This module launches Playwright browsers and wraps a single page in the
engine contract using Playwright's async API.
"""

import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from ...core.errors import ActionError, ActionFailure
from ...utils.http import get_response_category, is_success_status
from ..common.interface import DEFAULT_TIMEOUT_SECONDS, BrowserEngine, PostAction
from ..navigator import (apply_post_action, hash_page_content, stringify_script_result,
                         wait_for_change)

logger = logging.getLogger(__name__)

EVAL_FUNCTION = "script => eval(script)"

NAVIGATION_GRACE_SECONDS = 5.0

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-notifications",
    "--disable-popup-blocking",
    "--disable-background-networking",
]


class PlaywrightEngine(BrowserEngine):
    """
    Engine driving a Playwright page.

    Args:
        user_agent: User agent setting (see resolve_user_agent)
        timeout_seconds: Default Playwright timeout in seconds
        headless: Whether to run the browser without a window
        browser_type: "chromium", "chrome", "firefox" or "webkit"
        navigation_grace: Seconds open_and_run waits for a script to change
                          the page before returning the current content
    """

    def __init__(self, user_agent=None, timeout_seconds=DEFAULT_TIMEOUT_SECONDS, headless=True,
                 browser_type="chromium", navigation_grace=NAVIGATION_GRACE_SECONDS):
        super().__init__(user_agent=user_agent, timeout_seconds=timeout_seconds)
        self.headless = headless
        self.browser_type = browser_type
        self.navigation_grace = navigation_grace
        self._playwright = None
        self._browser = None
        self._page = None

    async def _launch(self, playwright):
        if self.browser_type == "chrome":
            return await playwright.chromium.launch(
                headless=self.headless, args=BROWSER_ARGS, channel="chrome"
            )
        elif self.browser_type == "firefox":
            return await playwright.firefox.launch(headless=self.headless)
        elif self.browser_type == "webkit":
            return await playwright.webkit.launch(headless=self.headless)
        return await playwright.chromium.launch(headless=self.headless, args=BROWSER_ARGS)

    async def _ensure_page(self):
        if self._page is None:
            self._playwright = await async_playwright().start()
            self._browser = await self._call(self._launch(self._playwright))
            context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport={"width": 1920, "height": 1080},
                ignore_https_errors=True,
                locale="en-US",
            )
            context.set_default_timeout(self.timeout_seconds * 1000)
            self._page = await context.new_page()
        return self._page

    async def _call(self, awaitable):
        try:
            return await awaitable
        except PlaywrightTimeoutError as e:
            logger.debug("Playwright timed out: %s", e.message)
            raise ActionFailure(ActionError.TIMEOUT)
        except PlaywrightError as e:
            logger.debug("Playwright call failed: %s", e.message)
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)

    async def _snapshot(self):
        page = self._page
        try:
            ready = await page.evaluate("document.readyState") == "complete"
            return page.url, await page.content(), ready
        except PlaywrightError:
            return None, "", False

    async def _capture(self):
        page = self._page
        html = await self._call(page.content())
        data = html.encode("utf-8")
        self._slot.store(data, page.url)
        return data, page.url

    async def open(self, url, post_action=PostAction()):
        page = await self._ensure_page()
        with self._loading():
            logger.debug("Navigating to %s", url)
            response = await self._call(page.goto(url, wait_until="load"))
            if response is not None and not is_success_status(response.status):
                logger.debug("Navigation to %s returned %s (%s)", url, response.status,
                             get_response_category(response.status))
                raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
        await apply_post_action(self, post_action)
        return await self._capture()

    async def current_content(self):
        """Live document content once a page has been loaded; scripts may have changed it."""
        if self._page is None or not self._slot.has_content:
            return self._slot.load()
        return await self._capture()

    async def run(self, script):
        page = await self._ensure_page()
        result = await self._call(page.evaluate(EVAL_FUNCTION, script))
        return stringify_script_result(result)

    async def open_and_run(self, script, post_action=PostAction()):
        page = await self._ensure_page()
        before_url, before_html, _ = await self._snapshot()
        with self._loading():
            try:
                await page.evaluate(EVAL_FUNCTION, script)
            except PlaywrightError as e:
                # Navigating away tears down the context the script ran in
                if "Execution context was destroyed" not in e.message:
                    logger.debug("Script failed: %s", e.message)
                    raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
            changed = await wait_for_change(
                self._snapshot, (before_url, hash_page_content(before_html)), self.navigation_grace
            )
        if not changed:
            logger.debug("Script did not change the page within %ss", self.navigation_grace)
        await apply_post_action(self, post_action)
        return await self._capture()

    async def close(self):
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.warning("Error closing browser: %s", e.message)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._page = None
        self._slot.clear()
