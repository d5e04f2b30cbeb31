"""
Browser module containing the engine contract and its implementations.

This package contains an HTTP-only engine and JavaScript-capable engines
built on Selenium and Playwright, all created through EngineFactory.
"""

from .common.interface import BrowserEngine, EngineFactory, PostAction

# Export the factory function for creating engine instances
create_engine = EngineFactory.create

__all__ = ["BrowserEngine", "PostAction", "EngineFactory", "create_engine"]
