"""
Effect - Descriptions of deferred work returned by reducers.

Reducers never perform I/O. When a transition needs something to happen
later (an AI phase after a pause, a delayed card hide, a randomized
stimulus), the reducer returns an Effect describing it and the StateStore
executes it after publishing the new state.

Kinds:
- NONE: pure transition
- RUN: async work whose optional result is dispatched as a new action
- FIRE_AND_FORGET: async work, result ignored
- BATCH: effects executed in order, each awaited before the next
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

A = TypeVar("A")

Work = Callable[[], Awaitable[Any]]


class EffectKind(Enum):
    NONE = "none"
    RUN = "run"
    FIRE_AND_FORGET = "fire_and_forget"
    BATCH = "batch"


@dataclass(frozen=True)
class Effect(Generic[A]):
    """
    An effect description.

    ``follow_up`` and ``delay`` are only informative: they are set by
    Effect.after so callers can see which action is scheduled without
    awaiting the work.
    """
    kind: EffectKind = EffectKind.NONE
    work: Work | None = field(default=None, compare=False)
    effects: tuple[Effect[A], ...] = ()
    follow_up: A | None = None
    delay: float = 0.0

    @property
    def is_none(self) -> bool:
        return self.kind == EffectKind.NONE

    @classmethod
    def none(cls) -> Effect[A]:
        return cls()

    @classmethod
    def run(cls, work: Callable[[], Awaitable[A | None]]) -> Effect[A]:
        """Run async work and feed its result (if any) back to the store."""
        return cls(kind=EffectKind.RUN, work=work)

    @classmethod
    def fire_and_forget(cls, work: Callable[[], Awaitable[Any]]) -> Effect[A]:
        return cls(kind=EffectKind.FIRE_AND_FORGET, work=work)

    @classmethod
    def batch(cls, *effects: Effect[A]) -> Effect[A]:
        kept = tuple(e for e in effects if not e.is_none)
        if not kept:
            return cls.none()
        return cls(kind=EffectKind.BATCH, effects=kept)

    @classmethod
    def after(cls, delay: float, action: A) -> Effect[A]:
        """Dispatch ``action`` after sleeping ``delay`` seconds."""
        async def work() -> A:
            if delay > 0:
                await asyncio.sleep(delay)
            return action

        return cls(kind=EffectKind.RUN, work=work, follow_up=action, delay=delay)
