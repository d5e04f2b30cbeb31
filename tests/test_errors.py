"""Tests for the error taxonomy."""

from zombie.core.errors import ActionError, ActionFailure


class TestActionError:
    """Tests for ActionError."""

    def test_closed_set_of_kinds(self):
        assert len(ActionError) == 8

    def test_descriptions(self):
        assert ActionError.NOT_FOUND.description == "Element Not Found"
        assert ActionError.INVALID_URL.description == "Invalid URL"
        assert ActionError.NOT_SUPPORTED.description == "Operation Not Supported on This Platform"


class TestActionFailure:
    """Tests for ActionFailure."""

    def test_carries_error(self):
        failure = ActionFailure(ActionError.TIMEOUT)
        assert failure.error is ActionError.TIMEOUT

    def test_equality_by_kind(self):
        assert ActionFailure(ActionError.TIMEOUT) == ActionFailure(ActionError.TIMEOUT)
        assert ActionFailure(ActionError.TIMEOUT) != ActionFailure(ActionError.NOT_FOUND)
