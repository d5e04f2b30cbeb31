#!/usr/bin/env python3
"""
Browser stealth configuration to avoid bot detection.
"""

import logging

from selenium_stealth import stealth

logger = logging.getLogger(__name__)


def apply_stealth_mode(driver, platform="Win32"):
    """
    Patch the common automation fingerprints of a Chrome WebDriver.

    Args:
        driver: Selenium WebDriver instance
        platform: navigator.platform value to report

    Returns:
        WebDriver: The same driver, patched
    """
    stealth(
        driver,
        languages=["en-US", "en"],
        vendor="Google Inc.",
        platform=platform,
        webgl_vendor="Intel Inc.",
        renderer="Intel Iris OpenGL Engine",
        fix_hairline=True,
    )
    logger.debug("Applied stealth mode to WebDriver")
    return driver
