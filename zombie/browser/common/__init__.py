"""
Common engine interfaces shared across engine implementations.
"""

from .interface import BrowserEngine, ContentSlot, EngineFactory, PostAction

__all__ = ["BrowserEngine", "ContentSlot", "EngineFactory", "PostAction"]
