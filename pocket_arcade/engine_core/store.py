"""
State Store - Single-writer container for one game session.

The store holds the current state, applies the reducer on every send(),
publishes the new state to listeners and then executes the returned
effect. Effects may yield follow-up actions (AI phases, delayed hides);
those go through the same path.

Execution model:
- Reducer application and listener notification are synchronous, so each
  transition is atomic on the event loop; only effect work awaits
- Trampoline: a chain's actions and effects share one explicit work deque,
  so a long chain of follow-ups never deepens the call stack
- Depth-first order: a follow-up action and its own effects run before
  the next effect of an enclosing batch
- Effect work that raises is treated as "no follow-up"
- Cancellation is never swallowed: cancelling a pending delay means the
  scheduled action is never dispatched

Two ways in:
- await send(action): apply, then drain the whole effect chain
- dispatch(action): apply now, drain the chain in a tracked task; the
  caller sees the new state immediately while delays run in the background
"""

from __future__ import annotations
import asyncio
from collections import deque
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

from .effect import Effect, EffectKind
from .reducer import Transition

S = TypeVar("S")
A = TypeVar("A")

Listener = Callable[[S], None]
ReduceFn = Callable[[S, A], "Transition[S, A]"]


class StateStore(Generic[S, A]):
    """
    Usage:
        store = StateStore(SnakeState(), SnakeReducer())
        store.subscribe(render)

        await store.send(SnakeAction.start())
        await store.send(SnakeAction.tick())
    """

    def __init__(self, initial_state: S, reducer: ReduceFn):
        self._state = initial_state
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def state(self) -> S:
        """Current state snapshot."""
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def send(self, action: A) -> S:
        """
        Dispatch an action and drain every effect it causes.

        Returns the state after the whole chain settled.
        """
        if self._closed:
            return self._state
        await self._drain(self._apply(action))
        return self._state

    def dispatch(self, action: A) -> asyncio.Task | None:
        """
        Apply an action now and run its effects in a tracked task.

        Returns None when the store is closed or nothing was scheduled.
        """
        if self._closed:
            return None
        effect = self._apply(action)
        if effect.is_none:
            return None
        task = asyncio.get_running_loop().create_task(self._drain(effect))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def settle(self) -> S:
        """Wait until every tracked effect chain has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        return self._state

    async def close(self) -> None:
        """Cancel in-flight effect chains and refuse new actions."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply(self, action: A) -> Effect:
        logger.debug("dispatch {}", action)
        new_state, effect = self._reducer(self._state, action)
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed")
        return effect

    async def _drain(self, effect: Effect) -> None:
        pending: deque[Any] = deque([effect])
        while pending and not self._closed:
            item = pending.popleft()
            if isinstance(item, Effect):
                await self._execute(item, pending)
            else:
                pending.appendleft(self._apply(item))

    async def _execute(self, effect: Effect, pending: deque[Any]) -> None:
        if effect.kind == EffectKind.NONE:
            return

        if effect.kind == EffectKind.BATCH:
            pending.extendleft(reversed(effect.effects))
            return

        try:
            result = await effect.work()
        except Exception as e:
            logger.debug("Effect failed, no follow-up: {!r}", e)
            return

        if effect.kind == EffectKind.RUN and result is not None:
            pending.appendleft(result)
