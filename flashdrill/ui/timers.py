"""
Question timers owned by the UI adapter.

Two one-shot timers run on the asyncio event loop:

- the response deadline, armed when a card is shown; when it fires the
  adapter forwards a deadline signal into the session
- the feedback hold, armed after a wrong answer; when it fires the adapter
  enables the "next" action again

Each handle is cleared before its callback runs, so a timer that has fired
can no longer be cancelled or fire twice.
"""

import asyncio
import logging
from typing import Callable, Optional

from ..config import Config

logger = logging.getLogger(__name__)


class QuestionTimers:
    """Deadline and feedback-hold timers for one practice view."""

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        response_deadline: float = Config.RESPONSE_DEADLINE,
        feedback_hold: float = Config.FEEDBACK_HOLD,
    ):
        """
        Args:
            loop: Event loop to schedule on (the running loop if omitted)
            response_deadline: Default deadline window in seconds
            feedback_hold: Default hold window in seconds
        """
        self._loop = loop
        self.response_deadline = response_deadline
        self.feedback_hold = feedback_hold
        self._deadline: Optional[asyncio.TimerHandle] = None
        self._hold: Optional[asyncio.TimerHandle] = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    @property
    def deadline_armed(self) -> bool:
        return self._deadline is not None

    @property
    def hold_armed(self) -> bool:
        return self._hold is not None

    def arm_deadline(self, callback: Callable[[], None], seconds: Optional[float] = None) -> None:
        """(Re)arm the response deadline."""
        self.disarm_deadline()
        delay = self.response_deadline if seconds is None else seconds
        self._deadline = self.loop.call_later(delay, self._fire_deadline, callback)

    def disarm_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    def arm_feedback_hold(self, callback: Callable[[], None], seconds: Optional[float] = None) -> None:
        """(Re)arm the feedback hold."""
        self.disarm_feedback_hold()
        delay = self.feedback_hold if seconds is None else seconds
        self._hold = self.loop.call_later(delay, self._fire_hold, callback)

    def disarm_feedback_hold(self) -> None:
        if self._hold is not None:
            self._hold.cancel()
            self._hold = None

    def cancel_all(self) -> None:
        self.disarm_deadline()
        self.disarm_feedback_hold()

    def _fire_deadline(self, callback: Callable[[], None]) -> None:
        self._deadline = None
        logger.debug("Response deadline elapsed")
        callback()

    def _fire_hold(self, callback: Callable[[], None]) -> None:
        self._hold = None
        callback()
