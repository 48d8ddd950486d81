"""
Frame scheduler for deferred work.

Everything runs on the main loop. Work can be deferred to "before the next
frame" (optionally retried for a bounded number of frames) or to a timer
measured in milliseconds. Every scheduled callback returns a handle that can
be cancelled.
"""

import traceback
from typing import Callable, List, Optional

import pygame

from tenfoot.constants import FOCUS_RETRY_LIMIT
from tenfoot.utils.logging import log_error


def _once(callback: Callable[[], None]) -> Callable[[], bool]:
    def run() -> bool:
        callback()
        return True

    return run


class ScheduledTask:
    """Cancellable handle for a deferred callback."""

    def __init__(
        self,
        callback: Callable[[], Optional[bool]],
        attempts: int = 1,
        due: Optional[int] = None,
        on_give_up: Optional[Callable[[], None]] = None,
    ):
        self._callback = callback
        self.attempts_left = attempts
        self.due = due
        self._on_give_up = on_give_up
        self.cancelled = False
        self.finished = False

    @property
    def active(self) -> bool:
        """True while the task may still run."""
        return not (self.cancelled or self.finished)

    def cancel(self) -> None:
        """Prevent the task from running again."""
        self.cancelled = True

    def _run(self) -> bool:
        """
        Run the callback once.

        Returns:
            True if the task is done (succeeded or out of attempts)
        """
        self.attempts_left -= 1
        try:
            done = self._callback() is not False
        except Exception as e:
            log_error(
                f"Deferred callback failed: {e}", type(e).__name__, traceback.format_exc()
            )
            done = True

        if done:
            self.finished = True
            return True

        if self.attempts_left <= 0:
            self.finished = True
            if self._on_give_up:
                self._on_give_up()
            return True

        return False


class FrameScheduler:
    """
    Runs deferred callbacks from the main loop.

    Call run_frame() once per loop iteration, before drawing. Callbacks
    scheduled while a frame is running wait for the following frame.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or pygame.time.get_ticks
        self._frame_tasks: List[ScheduledTask] = []
        self._timers: List[ScheduledTask] = []

    def now(self) -> int:
        """Current time in milliseconds."""
        return self._clock()

    def before_next_frame(self, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback once, before the next frame is drawn."""
        task = ScheduledTask(_once(callback))
        self._frame_tasks.append(task)
        return task

    def retry_before_next_frame(
        self,
        callback: Callable[[], bool],
        max_attempts: int = FOCUS_RETRY_LIMIT,
        on_give_up: Optional[Callable[[], None]] = None,
    ) -> ScheduledTask:
        """
        Run callback before each upcoming frame until it returns True.

        Args:
            callback: Returns True when the work is done
            max_attempts: Number of frames to try before giving up
            on_give_up: Called once if every attempt failed

        Returns:
            Cancellable handle
        """
        task = ScheduledTask(callback, max(1, max_attempts), on_give_up=on_give_up)
        self._frame_tasks.append(task)
        return task

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback once, after delay_ms milliseconds."""
        task = ScheduledTask(_once(callback), due=self.now() + delay_ms)
        self._timers.append(task)
        return task

    def run_frame(self, now: Optional[int] = None) -> None:
        """
        Fire due timers, then the frame callbacks queued so far.

        Args:
            now: Current time in ms (defaults to the scheduler clock)
        """
        if now is None:
            now = self.now()

        due_timers = [t for t in self._timers if t.active and t.due <= now]
        self._timers = [t for t in self._timers if t.active and t.due > now]
        for task in due_timers:
            if task.active:
                task._run()

        tasks, self._frame_tasks = self._frame_tasks, []
        for task in tasks:
            if not task.active:
                continue
            if not task._run():
                self._frame_tasks.append(task)

    def cancel_all(self) -> None:
        """Cancel every pending callback."""
        for task in self._frame_tasks + self._timers:
            task.cancel()
        self._frame_tasks = []
        self._timers = []

    def pending_count(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for t in self._frame_tasks + self._timers if t.active)
