"""Tests for user agent selection."""

from zombie.utils.user_agent import DEFAULT_USER_AGENT, UserAgent, resolve_user_agent


class TestUserAgent:
    """Tests for UserAgent and resolve_user_agent."""

    def test_default(self):
        assert resolve_user_agent() == DEFAULT_USER_AGENT.value

    def test_member_and_name(self):
        assert resolve_user_agent(UserAgent.SAFARI_IPAD) == UserAgent.SAFARI_IPAD.value
        assert resolve_user_agent("chrome_mac") == UserAgent.CHROME_MAC.value

    def test_literal_string_passes_through(self):
        assert resolve_user_agent("MyBot/1.0") == "MyBot/1.0"

    def test_random_pools(self):
        assert UserAgent.random() in {agent.value for agent in UserAgent}
        assert "iP" in UserAgent.mobile_only()
        assert "Macintosh" in UserAgent.desktop_only()
        assert resolve_user_agent("mobile") in {
            UserAgent.SAFARI_IPHONE.value, UserAgent.SAFARI_IPHONE_OLD.value, UserAgent.SAFARI_IPAD.value
        }
