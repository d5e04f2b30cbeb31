#!/usr/bin/env python3
"""
Selenium engine module.

This module creates Chrome WebDriver instances and wraps them in the engine
contract. WebDriver calls are blocking, so they run in worker threads to
keep the event loop free.
"""

import asyncio
import logging
import platform
import time

from selenium import webdriver
from selenium.common.exceptions import (SessionNotCreatedException, TimeoutException,
                                        WebDriverException)
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from ...core.errors import ActionError, ActionFailure
from ..common.interface import DEFAULT_TIMEOUT_SECONDS, BrowserEngine, PostAction
from ..navigator import (apply_post_action, hash_page_content, stringify_script_result,
                         wait_for_change)

logger = logging.getLogger(__name__)

# Evaluates a script and hands back its completion value
EVAL_SCRIPT = "return eval(arguments[0]);"

NAVIGATION_GRACE_SECONDS = 5.0


def setup_webdriver(headless=True, webdriver_path=None, user_agent=None,
                    page_load_timeout=30, retry_count=3):
    """
    Set up and return a Chrome WebDriver instance with retry logic.

    Args:
        headless: Whether to run in headless mode
        webdriver_path: Path to the WebDriver executable; downloaded with
                        webdriver-manager when not given
        user_agent: User-Agent string to send, or None for the browser default
        page_load_timeout: Timeout for page loads and scripts in seconds
        retry_count: Number of times to retry WebDriver creation

    Returns:
        WebDriver: Configured Selenium WebDriver instance

    Raises:
        WebDriverException: If creation fails on the last attempt
    """
    logger.debug("Starting WebDriver setup: headless=%s, system=%s", headless, platform.system())
    chrome_options = Options()
    if headless:
        chrome_options.add_argument('--headless=new')

    chrome_options.page_load_strategy = 'normal'

    chrome_options.add_argument('--no-sandbox')
    chrome_options.add_argument('--disable-dev-shm-usage')
    chrome_options.add_argument('--disable-gpu')
    chrome_options.add_argument('--disable-extensions')
    chrome_options.add_argument('--disable-notifications')
    chrome_options.add_argument('--disable-popup-blocking')
    chrome_options.add_argument('--disable-infobars')

    if platform.system() == 'Darwin':
        chrome_options.add_argument('--disable-renderer-backgrounding')
        chrome_options.add_argument('--force-device-scale-factor=1')

    if user_agent:
        chrome_options.add_argument(f'--user-agent={user_agent}')

    for attempt in range(retry_count):
        try:
            if not webdriver_path:
                service = Service(ChromeDriverManager().install())
            else:
                service = Service(webdriver_path)

            driver = webdriver.Chrome(service=service, options=chrome_options)
            driver.set_page_load_timeout(page_load_timeout)
            driver.set_script_timeout(page_load_timeout)
            return driver

        except (WebDriverException, SessionNotCreatedException) as e:
            logger.warning("WebDriver creation failed (attempt %d/%d): %s", attempt + 1, retry_count, e)
            if attempt == retry_count - 1:
                raise
            time.sleep(2)

    raise RuntimeError("Failed to create WebDriver after multiple attempts")


class SeleniumEngine(BrowserEngine):
    """
    Engine driving Chrome through Selenium.

    Args:
        user_agent: User agent setting (see resolve_user_agent)
        timeout_seconds: Page load and script timeout in seconds
        headless: Whether to run the browser without a window
        webdriver_path: Path to a chromedriver executable
        stealth: Apply selenium-stealth patches to the driver
        undetected: Use undetected-chromedriver instead of stock Chrome
        driver: An already-created WebDriver to adopt
        navigation_grace: Seconds open_and_run waits for a script to change
                          the page before returning the current content
    """

    def __init__(self, user_agent=None, timeout_seconds=DEFAULT_TIMEOUT_SECONDS, headless=True,
                 webdriver_path=None, stealth=False, undetected=False, driver=None,
                 navigation_grace=NAVIGATION_GRACE_SECONDS):
        super().__init__(user_agent=user_agent, timeout_seconds=timeout_seconds)
        self.headless = headless
        self.webdriver_path = webdriver_path
        self.stealth = stealth
        self.undetected = undetected
        self.navigation_grace = navigation_grace
        self._driver = driver

    def _create_driver(self):
        if self.undetected:
            from .undetected import setup_undetected_webdriver
            driver = setup_undetected_webdriver(
                headless=self.headless,
                user_agent=self.user_agent,
                page_load_timeout=self.timeout_seconds,
            )
        else:
            driver = setup_webdriver(
                headless=self.headless,
                webdriver_path=self.webdriver_path,
                user_agent=self.user_agent,
                page_load_timeout=self.timeout_seconds,
            )
        if self.stealth:
            from .stealth import apply_stealth_mode
            apply_stealth_mode(driver)
        return driver

    async def _ensure_driver(self):
        if self._driver is None:
            self._driver = await self._call(self._create_driver)
        return self._driver

    async def _call(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except TimeoutException as e:
            logger.debug("WebDriver timed out: %s", e.msg)
            raise ActionFailure(ActionError.TIMEOUT)
        except WebDriverException as e:
            logger.debug("WebDriver call failed: %s", e.msg)
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)

    @staticmethod
    def _read_state(driver):
        try:
            ready = driver.execute_script("return document.readyState") == "complete"
            return driver.current_url, driver.page_source, ready
        except WebDriverException:
            return None, "", False

    async def _snapshot(self):
        return await asyncio.to_thread(self._read_state, self._driver)

    async def _capture(self):
        driver = self._driver
        html = await self._call(lambda: driver.page_source)
        url = await self._call(lambda: driver.current_url)
        data = html.encode("utf-8")
        self._slot.store(data, url)
        return data, url

    async def open(self, url, post_action=PostAction()):
        driver = await self._ensure_driver()
        with self._loading():
            logger.debug("Navigating to %s", url)
            await self._call(driver.get, url)
        await apply_post_action(self, post_action)
        return await self._capture()

    async def current_content(self):
        """Live document content once a page has been loaded; scripts may have changed it."""
        if self._driver is None or not self._slot.has_content:
            return self._slot.load()
        return await self._capture()

    async def run(self, script):
        driver = await self._ensure_driver()
        result = await self._call(driver.execute_script, EVAL_SCRIPT, script)
        return stringify_script_result(result)

    async def open_and_run(self, script, post_action=PostAction()):
        driver = await self._ensure_driver()
        before_url, before_html, _ = await self._snapshot()
        with self._loading():
            await self._call(driver.execute_script, EVAL_SCRIPT, script)
            changed = await wait_for_change(
                self._snapshot, (before_url, hash_page_content(before_html)), self.navigation_grace
            )
        if not changed:
            logger.debug("Script did not change the page within %ss", self.navigation_grace)
        await apply_post_action(self, post_action)
        return await self._capture()

    async def close(self):
        if self._driver is not None:
            driver, self._driver = self._driver, None
            try:
                await asyncio.to_thread(driver.quit)
            except WebDriverException as e:
                logger.warning("Error closing WebDriver: %s", e.msg)
        self._slot.clear()
