"""Cooperative cancellation shared between the caller and the pipeline."""
from __future__ import annotations

import threading
from typing import Optional

from ngramfreq.errors import OperationCancelled

__all__ = ["CancelToken", "check_cancelled"]


class CancelToken:
    """
    Thread-safe cancellation flag.

    The pipeline polls the token once per unit of input (character or word).
    Cancelling never rolls back work that has already been applied.

    Examples:
        >>> token = CancelToken()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason = "operation cancelled"

    def cancel(self, reason: Optional[str] = None) -> None:
        if reason:
            self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """Raise OperationCancelled if cancellation has been requested."""
        if self._event.is_set():
            raise OperationCancelled(self.reason)


def check_cancelled(token: Optional[CancelToken]) -> None:
    """Raise OperationCancelled if token is set; None means never cancelled."""
    if token is not None and token.cancelled:
        raise OperationCancelled(token.reason)
