# inventory_tracker/ui/confirm_gate.py

"""Yes/no gate placed in front of destructive actions."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("inventory_tracker.ui.gate")

GateAction = Callable[[str], Awaitable[None] | None]


class GateState(Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True)
class GateTarget:
    """What the open gate is asking about."""

    target_id: str
    label: str


class ConfirmationGate:
    """Holds at most one pending target until it is confirmed or cancelled.

    ``confirm()`` runs the action with the target's id and closes the
    gate; ``cancel()`` closes it without running anything. Both are
    no-ops while the gate is closed.
    """

    def __init__(self) -> None:
        self.state = GateState.CLOSED
        self.target: GateTarget | None = None
        self._action: GateAction | None = None

    @property
    def is_open(self) -> bool:
        return self.state is GateState.OPEN

    def open(self, target_id: str, label: str, action: GateAction) -> GateTarget:
        """Arm the gate for *target_id*.

        Raises:
            RuntimeError: If another target is already pending.
        """
        if self.is_open:
            raise RuntimeError("Confirmation gate is already open")
        self.state = GateState.OPEN
        self.target = GateTarget(target_id, label)
        self._action = action
        logger.debug("Gate opened for %s (%s)", target_id, label)
        return self.target

    def _close(self) -> None:
        self.state = GateState.CLOSED
        self.target = None
        self._action = None

    async def confirm(self) -> GateTarget | None:
        """Run the pending action and close. Returns the confirmed target."""
        if not self.is_open or self.target is None or self._action is None:
            return None
        target, action = self.target, self._action
        self._close()
        logger.debug("Gate confirmed for %s", target.target_id)
        result = action(target.target_id)
        if inspect.isawaitable(result):
            await result
        return target

    def cancel(self) -> GateTarget | None:
        """Discard the pending target. Returns what was discarded."""
        if not self.is_open:
            return None
        target = self.target
        self._close()
        logger.debug(
            "Gate cancelled for %s", target.target_id if target else None,
        )
        return target
