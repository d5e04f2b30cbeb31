"""
Playwright engine, available with the ``playwright`` extra.
"""

from .driver import PlaywrightEngine

__all__ = ["PlaywrightEngine"]
