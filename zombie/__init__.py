"""
Zombie headless browser package.

This package provides composable, engine-agnostic browser automation:
lazy Actions, a typed search language compiled to CSS queries, a parsed
page and element model, and pluggable rendering engines.
"""

__version__ = "0.1.0"

from .browser.common.interface import BrowserEngine, EngineFactory, PostAction
from .content.elements import (HTMLButton, HTMLElement, HTMLForm, HTMLFrame, HTMLImage,
                               HTMLLink, HTMLTable, HTMLTableColumn, HTMLTableRow)
from .content.page import HTMLPage, JSONPage, Page
from .content.search import SearchType
from .core.action import Action, Result
from .core.automation import Zombie
from .core.errors import ActionError, ActionFailure
from .utils.user_agent import UserAgent

__all__ = [
    "Zombie",
    "Action",
    "Result",
    "ActionError",
    "ActionFailure",
    "SearchType",
    "Page",
    "HTMLPage",
    "JSONPage",
    "HTMLElement",
    "HTMLLink",
    "HTMLButton",
    "HTMLForm",
    "HTMLFrame",
    "HTMLImage",
    "HTMLTable",
    "HTMLTableRow",
    "HTMLTableColumn",
    "BrowserEngine",
    "EngineFactory",
    "PostAction",
    "UserAgent",
]
