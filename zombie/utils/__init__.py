"""
Utility modules for URL handling, HTTP responses and user agents.
"""

from .http import ContentFetcher, handle_response, is_success_status
from .url import is_valid_url, resolve_url, validate_url
from .user_agent import UserAgent, resolve_user_agent

__all__ = [
    "ContentFetcher",
    "handle_response",
    "is_success_status",
    "is_valid_url",
    "validate_url",
    "resolve_url",
    "UserAgent",
    "resolve_user_agent",
]
