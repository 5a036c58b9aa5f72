from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .loader import NodeArena
from .models import Channel

NodeT = TypeVar("NodeT")


@dataclass(slots=True)
class NarrativeCursor(Generic[NodeT]):
    """The active node of one channel. References nodes in an arena, never owns them."""

    arena: NodeArena
    channel: Channel
    active: int | None = None

    @property
    def node(self) -> NodeT | None:
        if self.active is None:
            return None
        return self.arena.node(self.active)

    def is_at_end(self) -> bool:
        return self.active is None or self.arena.next_of(self.active) is None

    def advance(self) -> NodeT | None:
        if not self.is_at_end():
            self.active = self.arena.next_of(self.active)
        return self.node

    def reset(self, handle: int | None) -> NodeT | None:
        self.active = handle
        return self.node
