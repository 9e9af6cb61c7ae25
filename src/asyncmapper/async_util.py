from __future__ import annotations

import asyncio
import logging
from asyncio import Task
from typing import Any, Callable, TypeAlias

from .compose import Spec, normalize
from .mapper import FuncMapper, Mapper, invoke
from .util import Err, Result

logger = logging.getLogger(__name__)

Callback: TypeAlias = Callable[[Any, Any], None]
CallbackFunc: TypeAlias = Callable[[Any, Callback], Any]

_tasks: set[Task[Any]] = set()


def _register_task(task: Task[Any]) -> None:
    _tasks.add(task)
    task.add_done_callback(_tasks.discard)


# ---- callback -> async bridge ----
def from_callback(fn: CallbackFunc, *, log: bool = False) -> Mapper:
    """
    Adapt ``fn(value, done)`` into an async mapper, where ``done(err, result)``
    is a node-style completion callback.

    Only the first ``done`` call counts. ``done`` may be called synchronously,
    later on the loop, or from another thread.
    """
    name = getattr(fn, "__name__", "callback")

    async def run(value: Any) -> Result[Any]:
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[Result[Any]] = loop.create_future()

        def _settle(res: Result[Any]) -> None:
            if fut.done():
                if not fut.cancelled():
                    logger.warning("%s: completion callback fired more than once", name)
                return
            fut.set_result(res)

        def done(err: Any = None, result: Any = None) -> None:
            res = Err(err) if err is not None else result
            loop.call_soon_threadsafe(_settle, res)

        try:
            fn(value, done)
        except Exception as e:
            # queued behind any done() already issued
            loop.call_soon_threadsafe(_settle, Err(e))

        return await fut

    return FuncMapper(run, name=name, log=log)


# ---- async -> callback bridge ----
def to_callback(spec: Spec) -> Callable[[Any, Callback], Task[Result[Any]]]:
    """
    Expose a mapper through the ``run(value, done)`` convention. ``done`` is
    called exactly once with ``(err, None)`` or ``(None, result)``.
    """
    mapper = normalize(spec)

    def run(value: Any, done: Callback) -> Task[Result[Any]]:
        task = asyncio.create_task(invoke(mapper, value))
        _register_task(task)

        def _deliver(t: Task[Result[Any]]) -> None:
            if t.cancelled():
                done(asyncio.CancelledError(), None)
                return
            exc = t.exception()
            if exc is not None:
                done(exc, None)
                return
            res = t.result()
            if isinstance(res, Err):
                done(res.error, None)
            else:
                done(None, res)

        task.add_done_callback(_deliver)
        return task

    return run
