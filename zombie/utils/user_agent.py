#!/usr/bin/env python3
"""
User agent module.

This module contains the built-in user-agent strings engines identify
themselves with, plus helpers for rotating through them.
"""

import random
from enum import Enum


class UserAgent(str, Enum):
    """Realistic browser user-agent strings."""

    # macOS Safari
    SAFARI_MAC = "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6_1) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15"
    SAFARI_MAC_OLD = "Mozilla/5.0 (Macintosh; Intel Mac OS X 12_6_8) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.6 Safari/605.1.15"

    # macOS Chrome
    CHROME_MAC = "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6_1) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
    CHROME_MAC_OLD = "Mozilla/5.0 (Macintosh; Intel Mac OS X 12_5) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"

    # iPhone Safari
    SAFARI_IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
    SAFARI_IPHONE_OLD = "Mozilla/5.0 (iPhone; CPU iPhone OS 16_7 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1"

    # iPad Safari
    SAFARI_IPAD = "Mozilla/5.0 (iPad; CPU OS 17_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"

    def __str__(self):
        return self.value

    @classmethod
    def random(cls):
        """Random user agent string from all built-ins."""
        return random.choice(list(cls)).value

    @classmethod
    def desktop_only(cls):
        return random.choice(
            [cls.SAFARI_MAC, cls.SAFARI_MAC_OLD, cls.CHROME_MAC, cls.CHROME_MAC_OLD]
        ).value

    @classmethod
    def mobile_only(cls):
        return random.choice(
            [cls.SAFARI_IPHONE, cls.SAFARI_IPHONE_OLD, cls.SAFARI_IPAD]
        ).value


DEFAULT_USER_AGENT = UserAgent.SAFARI_MAC


def resolve_user_agent(user_agent=None):
    """
    Turn a user agent setting into a header string.

    Accepts a UserAgent member, a member name ('chrome_mac'), the keywords
    'random', 'desktop' or 'mobile', or a literal user-agent string.
    """
    if user_agent is None:
        return DEFAULT_USER_AGENT.value
    if isinstance(user_agent, UserAgent):
        return user_agent.value
    keyword = user_agent.strip().lower()
    if keyword == "random":
        return UserAgent.random()
    if keyword == "desktop":
        return UserAgent.desktop_only()
    if keyword == "mobile":
        return UserAgent.mobile_only()
    member = UserAgent.__members__.get(keyword.upper())
    if member is not None:
        return member.value
    return user_agent
