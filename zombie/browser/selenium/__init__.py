"""
Selenium engine for pages that need a real browser.
"""

from .driver import SeleniumEngine, setup_webdriver

__all__ = ["SeleniumEngine", "setup_webdriver"]
