"""
Core module containing actions and the error taxonomy.

The automation facade lives in ``zombie.core.automation``.
"""

from .action import Action, Result
from .errors import ActionError, ActionFailure

__all__ = ["Action", "Result", "ActionError", "ActionFailure"]
