"""
Editor Actions

Value objects describing mutations the engine can dispatch to a rendering
surface. Every action knows its own inverse (reverse()), which is what the
history hands back on undo: undo is a replay of the reversed action through
the same dispatch router used for forward actions.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Union

from studio.models import ActionTarget, ElementMetadata

UPDATE_STYLE = 'update-style'

Target = Union[ActionTarget, ElementMetadata]


@dataclass(frozen=True)
class Change:
    """Before/after pair carried by every reversible action."""
    updated: str
    original: str

    def reverse(self) -> 'Change':
        return Change(updated=self.original, original=self.updated)


@dataclass(frozen=True)
class UpdateStyleAction:
    """Set one style property on every target."""
    targets: Tuple[Target, ...]
    style: str
    change: Change
    type: str = field(default=UPDATE_STYLE, init=False)

    def __post_init__(self):
        # Accept any iterable of targets but store an immutable tuple
        object.__setattr__(self, 'targets', tuple(self.targets))

    def reverse(self) -> 'UpdateStyleAction':
        return UpdateStyleAction(targets=self.targets, style=self.style, change=self.change.reverse())


@dataclass(frozen=True)
class UnknownAction:
    """
    An action whose type the router does not handle.

    Kept so that it can still be recorded in history; dispatching it does
    nothing, and its reverse is itself.
    """
    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    def reverse(self) -> 'UnknownAction':
        return self


Action = Union[UpdateStyleAction, UnknownAction]
