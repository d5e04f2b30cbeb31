#!/usr/bin/env python3
"""
Undetected ChromeDriver setup for sites with advanced bot detection.
"""

import logging
import time

import undetected_chromedriver as uc

logger = logging.getLogger(__name__)


def setup_undetected_webdriver(headless=True, user_agent=None, page_load_timeout=30, retry_count=3):
    """
    Create an Undetected ChromeDriver instance.

    Args:
        headless: Whether to run in headless mode
        user_agent: User-Agent string to send, or None for the browser default
        page_load_timeout: Page load and script timeout in seconds
        retry_count: Number of times to retry driver creation

    Returns:
        WebDriver: Configured driver

    Raises:
        RuntimeError: If creation fails after every attempt
    """
    last_error = None
    for attempt in range(retry_count):
        try:
            options = uc.ChromeOptions()
            if headless:
                options.add_argument("--headless=new")
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")
            options.add_argument("--disable-gpu")
            if user_agent:
                options.add_argument(f"--user-agent={user_agent}")

            driver = uc.Chrome(options=options)
            driver.set_page_load_timeout(page_load_timeout)
            driver.set_script_timeout(page_load_timeout)

            logger.debug("Created undetected ChromeDriver (headless=%s)", headless)
            return driver
        except Exception as e:
            last_error = e
            logger.warning(
                "Undetected ChromeDriver creation failed (attempt %d/%d): %s",
                attempt + 1, retry_count, e,
            )
            if attempt < retry_count - 1:
                time.sleep(2)

    raise RuntimeError("Failed to create Undetected ChromeDriver after multiple attempts") from last_error
