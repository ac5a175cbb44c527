"""Cancellable recurring polling task.

A ``CancellablePolling`` runs a tick coroutine every ``interval`` seconds on
the running event loop until the tick produces a value (resolved), raises
(rejected) or the handle is cancelled. Exactly one terminal state is ever
reached and the timer task is always released.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Generator
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from traktkit.shared.errors import TraktPollingCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PollingState(Enum):
    """Lifecycle states of a polling handle."""

    IDLE = "idle"
    POLLING = "polling"
    RESOLVED = "resolved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({PollingState.RESOLVED, PollingState.REJECTED, PollingState.CANCELLED})


class CancellablePolling(Generic[T]):
    """Awaitable handle over a recurring tick.

    Args:
        tick: Coroutine function returning a value to resolve, None to keep
            polling, or raising to reject
        interval: Delay between ticks in seconds
        on_done: Callback invoked once with the handle when it terminates

    Example:
        >>> polling = CancellablePolling(check, interval=5)
        >>> polling.start()
        >>> result = await polling
    """

    def __init__(
        self,
        tick: Callable[[], Awaitable[T | None]],
        interval: float,
        on_done: Callable[[CancellablePolling[T]], None] | None = None,
    ) -> None:
        self._tick = tick
        self.interval = interval
        self._on_done = on_done
        self._state = PollingState.IDLE
        self._task: asyncio.Task[None] | None = None
        self._future: asyncio.Future[T] | None = None
        self.ticks = 0

    @property
    def state(self) -> PollingState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state in TERMINAL_STATES

    def start(self) -> CancellablePolling[T]:
        """Schedule the polling task on the running loop."""
        if self._state is not PollingState.IDLE:
            return self
        loop = asyncio.get_running_loop()
        self._future = loop.create_future()
        self._state = PollingState.POLLING
        self._task = loop.create_task(self._run())
        return self

    async def _run(self) -> None:
        while self._state is PollingState.POLLING:
            await asyncio.sleep(self.interval)
            if self._state is not PollingState.POLLING:
                return
            self.ticks += 1
            try:
                result = await self._tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._finish(PollingState.REJECTED, error=e, from_task=True)
                return
            if result is not None:
                self._finish(PollingState.RESOLVED, result=result, from_task=True)
                return

    def _finish(
        self,
        state: PollingState,
        result: T | None = None,
        error: BaseException | None = None,
        from_task: bool = False,
    ) -> bool:
        if self.done:
            return False
        self._state = state
        if self._future is not None and not self._future.done():
            if error is not None:
                self._future.set_exception(error)
                if state is PollingState.CANCELLED:
                    # cancellation may have no awaiter
                    self._future.exception()
            else:
                self._future.set_result(result)  # type: ignore[arg-type]
        if not from_task and self._task is not None and not self._task.done():
            self._task.cancel()
        if self._on_done is not None:
            self._on_done(self)
        return True

    def cancel(self) -> bool:
        """Stop polling and reject with TraktPollingCancelledError.

        Returns:
            True if this call cancelled the polling, False if it had already ended
        """
        if self._state is PollingState.IDLE:
            self._state = PollingState.CANCELLED
            return True
        cancelled = self._finish(PollingState.CANCELLED, error=TraktPollingCancelledError())
        if cancelled:
            logger.warning("Polling cancelled")
        return cancelled

    def result(self) -> asyncio.Future[T]:
        if self._future is None:
            raise RuntimeError("Polling has not been started")
        return self._future

    def __await__(self) -> Generator[Any, None, T]:
        return self.result().__await__()

    def __repr__(self) -> str:
        return f"CancellablePolling(state={self._state.value}, interval={self.interval}, ticks={self.ticks})"
