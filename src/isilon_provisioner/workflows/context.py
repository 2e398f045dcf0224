"""Deadline and cancellation of a single workflow call."""

import time
from threading import Event

from isilon_provisioner.exceptions import OperationCancelledError


class OperationContext:
    """Carry the caller's deadline and cancellation signal through a workflow.

    The workflow checks the context before each step and gives the remaining time
    to every backend call.

    Args:
        timeout (float | None): seconds available for the whole operation.
        cancel_event (Event | None): set by the caller to stop the operation.

    """

    def __init__(
        self, *, timeout: float | None = None, cancel_event: Event | None = None
    ) -> None:
        self.deadline = None if timeout is None else time.monotonic() + timeout
        self.cancel_event = cancel_event if cancel_event is not None else Event()

    def cancel(self) -> None:
        self.cancel_event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self.cancel_event.is_set() or self.remaining() == 0.0

    def check(self, step: str) -> float | None:
        """Stop the operation if cancelled, otherwise return the time left.

        Args:
            step (str): name of the step about to start.

        Returns:
            float | None: timeout to use for the next backend call.

        Raises:
            OperationCancelledError when the operation must stop.

        """
        if self.expired():
            raise OperationCancelledError(step)
        return self.remaining()
