"""
Undo history for editor actions.

The history is a small state machine:

    IDLE                    push() records a single-action unit
    RECORDING_TRANSACTION   push() appends to the open buffer

start_transaction() moves IDLE -> RECORDING_TRANSACTION, commit_transaction()
folds the buffer into one unit and moves back to IDLE. undo() pops the most
recent unit and hands back the reversed actions, newest first, for the
engine to dispatch. There is no redo queue.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Tuple

from studio.actions import Action
from studio.observable import Observable

logger = logging.getLogger(__name__)


class HistoryState(Enum):
    IDLE = 'idle'
    RECORDING_TRANSACTION = 'recording_transaction'


class History(Observable):
    """Transactional, undo-only log of applied actions."""

    def __init__(self, max_size: Optional[int] = None):
        """
        Args:
            max_size: Maximum number of undo units kept. Oldest units are
                dropped first. None keeps everything.
        """
        super().__init__()
        self._units: Deque[Tuple[Action, ...]] = deque(maxlen=max_size)
        self._buffer: List[Action] = []
        self._state = HistoryState.IDLE

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def can_undo(self) -> bool:
        return bool(self._units) or bool(self._buffer)

    def __len__(self) -> int:
        return len(self._units)

    def push(self, action: Action) -> None:
        if self._state is HistoryState.RECORDING_TRANSACTION:
            self._buffer.append(action)
        else:
            self._units.append((action,))
        self._notify()

    def start_transaction(self) -> None:
        """Open a transaction. Ignored (with a warning) if one is already open."""
        if self._state is HistoryState.RECORDING_TRANSACTION:
            logger.warning("start_transaction called while a transaction is open; ignoring")
            return
        self._buffer = []
        self._state = HistoryState.RECORDING_TRANSACTION

    def commit_transaction(self) -> None:
        """Close the open transaction as one undo unit. Empty buffers leave no trace."""
        if self._state is not HistoryState.RECORDING_TRANSACTION:
            logger.debug("commit_transaction called with no open transaction")
            return
        self._close_transaction()

    def undo(self) -> Optional[Tuple[Action, ...]]:
        """
        Pop the most recent unit.

        An open transaction is committed first, so undo inside a transaction
        reverts what was recorded so far.

        Returns:
            The reverse actions in dispatch order (newest first), or None if
            there is nothing to undo.
        """
        if self._state is HistoryState.RECORDING_TRANSACTION:
            self._close_transaction()

        if not self._units:
            return None

        unit = self._units.pop()
        self._notify()
        return tuple(action.reverse() for action in reversed(unit))

    def clear(self) -> None:
        self._units.clear()
        self._buffer = []
        self._state = HistoryState.IDLE
        self._notify()

    def _close_transaction(self) -> None:
        buffer, self._buffer = self._buffer, []
        self._state = HistoryState.IDLE
        if buffer:
            self._units.append(tuple(buffer))
            self._notify()
