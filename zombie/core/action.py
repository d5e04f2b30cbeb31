#!/usr/bin/env python3
"""
Composable action module.

This module contains the Action class, a lazy description of an asynchronous
computation that resolves to exactly one value or exactly one ActionError.
Actions are not started until executed, and executing an Action twice runs
the underlying operation twice.
"""

import asyncio
import logging
from typing import (Any, Awaitable, Callable, Generic, Iterable, List,
                    NamedTuple, Optional, TypeVar)

from .errors import ActionError, ActionFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Result(NamedTuple):
    """Outcome of an executed Action: a value or an error, never both."""

    value: Any = None
    error: Optional[ActionError] = None

    @property
    def is_success(self) -> bool:
        return self.error is None


class Action(Generic[T]):
    """
    A deferred asynchronous computation yielding a value or an ActionError.

    The wrapped operation is a zero-argument callable returning an awaitable.
    It signals failure by raising ActionFailure; any other exception escaping
    it is reported as a network request failure. Exceptions raised by the
    callbacks handed to the combinators are not converted and propagate to
    the caller unchanged.
    """

    def __init__(self, operation: Callable[[], Awaitable[T]]):
        self._operation = operation
        self._converts_errors = True

    @classmethod
    def _combined(cls, operation: Callable[[], Awaitable[T]]) -> "Action[T]":
        action = cls(operation)
        action._converts_errors = False
        return action

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def value(cls, value: T) -> "Action[T]":
        """Create an Action that succeeds with ``value``."""
        async def operation():
            return value
        return cls(operation)

    @classmethod
    def error(cls, error: ActionError) -> "Action[Any]":
        """Create an Action that fails with ``error``."""
        async def operation():
            raise ActionFailure(error)
        return cls(operation)

    @classmethod
    def from_result(cls, result: Result) -> "Action[Any]":
        if result.is_success:
            return cls.value(result.value)
        return cls.error(result.error)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(self) -> T:
        """
        Run the operation and return its value.

        Raises:
            ActionFailure: If the operation resolves to an ActionError
        """
        try:
            return await self._operation()
        except ActionFailure:
            raise
        except Exception as exc:
            if not self._converts_errors:
                raise
            logger.debug("Action operation raised %r", exc, exc_info=True)
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE) from exc

    async def result(self) -> Result:
        """Run the operation and return a Result instead of raising ActionFailure."""
        try:
            return Result(value=await self.execute())
        except ActionFailure as failure:
            return Result(error=failure.error)

    def start(self, completion: Callable[[Result], Any]) -> "asyncio.Task":
        """
        Schedule the Action on the running event loop.

        Args:
            completion: Called with the Result once the Action settles

        Returns:
            asyncio.Task: The scheduled task; abandoning it cancels the chain
        """
        task = asyncio.ensure_future(self.result())

        def _done(finished):
            if finished.cancelled():
                return
            if finished.exception() is not None:
                logger.error("Action callback raised %r", finished.exception(),
                             exc_info=finished.exception())
                return
            completion(finished.result())

        task.add_done_callback(_done)
        return task

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> "Action[U]":
        """Transform the success value; failures pass through unchanged."""
        async def operation():
            return f(await self.execute())
        return Action._combined(operation)

    def flat_map(self, f: Callable[[T], Optional[U]]) -> "Action[U]":
        """Transform the success value into an optional; None becomes a transform failure."""
        async def operation():
            transformed = f(await self.execute())
            if transformed is None:
                raise ActionFailure(ActionError.TRANSFORM_FAILURE)
            return transformed
        return Action._combined(operation)

    def and_then(self, f: Callable[[T], "Action[U]"]) -> "Action[U]":
        """
        Sequence a dependent Action built from this Action's value.

        ``f`` is only called once this Action has succeeded.
        """
        async def operation():
            value = await self.execute()
            return await f(value).execute()
        return Action._combined(operation)

    def then(self, other: "Action[U]") -> "Action[U]":
        """Run ``other`` after this Action succeeds, discarding this value."""
        return self.and_then(lambda _: other)

    def timeout(self, seconds: float) -> "Action[T]":
        """Fail with a timeout if the Action does not settle within ``seconds``."""
        async def operation():
            try:
                return await asyncio.wait_for(self.execute(), seconds)
            except asyncio.TimeoutError:
                raise ActionFailure(ActionError.TIMEOUT)
        return Action._combined(operation)

    @staticmethod
    def collect(
        initial: T,
        step: Callable[[T], "Action[T]"],
        until: Callable[[T], bool],
    ) -> "Action[List[T]]":
        """
        Repeatedly run ``step``, feeding each result into the next run.

        Collection stops once ``until`` returns False for the latest value,
        or on the first failure, in which case nothing collected so far is
        returned. ``until`` must eventually return False.

        Args:
            initial: Value passed to the first step
            step: Produces the next Action from the current value
            until: Continue while this returns True

        Returns:
            Action: All collected values in order
        """
        async def operation():
            values = []
            current = initial
            while True:
                current = await step(current).execute()
                values.append(current)
                if not until(current):
                    return values
        return Action._combined(operation)

    @staticmethod
    def batch(elements: Iterable[T], f: Callable[[T], "Action[U]"]) -> "Action[List[U]]":
        """
        Run ``f`` once per input, one after another in input order.

        The first failure is reported and already collected results are
        discarded.
        """
        async def operation():
            results = []
            for element in elements:
                results.append(await f(element).execute())
            return results
        return Action._combined(operation)

    def __repr__(self):
        return f"<Action {getattr(self._operation, '__qualname__', self._operation)!s}>"
