"""Minimal value tweening on the event loop.

A ``Tween`` moves a number from ``start`` to ``end`` over ``duration``
seconds, calling ``update(value)`` once per frame and ``complete()``
after the final value. It stands in for a browser tween engine: the
navigator only needs scroll offsets eased back to the top.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol, TypeAlias

import anyio

logger = logging.getLogger("wren.tween")

Easing: TypeAlias = Callable[[float], float]

FRAME_INTERVAL = 1 / 60


def linear(t: float) -> float:
    return t


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


class Tween:
    """A single tween. Call ``start()`` to schedule it on the running loop."""

    __slots__ = ("_task", "complete", "duration", "ease", "end", "start_value", "update")

    def __init__(
        self,
        *,
        start: float,
        end: float,
        duration: float,
        update: Callable[[float], object],
        complete: Callable[[], object] | None = None,
        ease: Easing = linear,
    ) -> None:
        self.start_value = start
        self.end = end
        self.duration = duration
        self.update = update
        self.complete = complete
        self.ease = ease
        self._task: asyncio.Task[None] | None = None

    def value_at(self, progress: float) -> float:
        progress = min(max(progress, 0.0), 1.0)
        return self.start_value + (self.end - self.start_value) * self.ease(progress)

    async def run(self) -> None:
        """Drive the tween to completion on the current loop."""
        began = time.monotonic()
        while self.duration > 0:
            progress = (time.monotonic() - began) / self.duration
            if progress >= 1.0:
                break
            self.update(self.value_at(progress))
            await anyio.sleep(FRAME_INTERVAL)

        self.update(self.end)
        if self.complete is not None:
            self.complete()

    def start(self) -> "Tween":
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()


class Animator(Protocol):
    def tween(
        self,
        *,
        start: float,
        end: float,
        duration: float,
        update: Callable[[float], object],
        complete: Callable[[], object] | None = None,
        ease: Easing = linear,
    ) -> Tween: ...


class TweenAnimator:
    """Default ``Animator``: starts each tween as a task on the running loop."""

    __slots__ = ()

    def tween(
        self,
        *,
        start: float,
        end: float,
        duration: float,
        update: Callable[[float], object],
        complete: Callable[[], object] | None = None,
        ease: Easing = linear,
    ) -> Tween:
        return Tween(
            start=start,
            end=end,
            duration=duration,
            update=update,
            complete=complete,
            ease=ease,
        ).start()
