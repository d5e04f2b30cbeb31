#!/usr/bin/env python3
"""
Error taxonomy module.

This module defines the closed set of failure kinds produced anywhere in the
automation core, and the exception used to carry one of them through
asynchronous chains.
"""

from enum import Enum

SUCCESS_STATUS = 200
ERROR_STATUS = 500


class ActionError(Enum):
    """Failure kinds an Action can resolve to."""

    NETWORK_REQUEST_FAILURE = "networkRequestFailure"
    NOT_FOUND = "notFound"
    PARSING_FAILURE = "parsingFailure"
    TRANSFORM_FAILURE = "transformFailure"
    SNAPSHOT_FAILURE = "snapshotFailure"
    NOT_SUPPORTED = "notSupported"
    TIMEOUT = "timeout"
    INVALID_URL = "invalidURL"

    @property
    def description(self):
        return _DESCRIPTIONS[self]

    def __str__(self):
        return self.description


_DESCRIPTIONS = {
    ActionError.NETWORK_REQUEST_FAILURE: "Network Request Failure",
    ActionError.NOT_FOUND: "Element Not Found",
    ActionError.PARSING_FAILURE: "Parsing Failure",
    ActionError.TRANSFORM_FAILURE: "Transform Failure",
    ActionError.SNAPSHOT_FAILURE: "Snapshot Failure",
    ActionError.NOT_SUPPORTED: "Operation Not Supported on This Platform",
    ActionError.TIMEOUT: "Operation Timed Out",
    ActionError.INVALID_URL: "Invalid URL",
}


class ActionFailure(Exception):
    """
    Exception raised when an Action resolves to an ActionError.

    Two failures compare equal when they carry the same error kind.
    """

    def __init__(self, error: ActionError):
        super().__init__(error.description)
        self.error = error

    def __eq__(self, other):
        if isinstance(other, ActionFailure):
            return self.error is other.error
        return NotImplemented

    def __hash__(self):
        return hash(self.error)

    def __repr__(self):
        return f"ActionFailure({self.error.name})"
