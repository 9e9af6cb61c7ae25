from __future__ import annotations

import asyncio
import logging
from asyncio import Future, Task
from collections.abc import Mapping
from typing import Any, Sequence, TypeAlias

from .mapper import Mapper, MapperFunc, asyncify, get, invoke, is_async_mapper
from .util import Err, Result

logger = logging.getLogger(__name__)

Spec: TypeAlias = Any


def normalize(spec: Spec, *, log: bool = False) -> MapperFunc:
    """
    Lower a mapper specification to a canonical async mapper.

    str                          -> get(spec)
    Mapper / coroutine function  -> spec, unchanged
    other callable               -> asyncify(spec)
    list / tuple                 -> seq(spec)
    mapping                      -> map(spec)

    Anything else raises TypeError right away.
    """
    if isinstance(spec, str):
        return get(spec)
    if is_async_mapper(spec):
        return spec
    if callable(spec):
        return asyncify(spec, log=log)
    if isinstance(spec, (list, tuple)):
        return seq(spec, log=log)
    if isinstance(spec, Mapping):
        return map(spec, log=log)
    raise TypeError(
        "Invalid mapper spec: str, callable, list or mapping expected, "
        f"but {type(spec).__name__} given"
    )


class SeqMapper(Mapper):
    def __init__(self, specs: Sequence[Spec] | None, log: bool = False) -> None:
        if isinstance(specs, (str, Mapping)):
            raise TypeError(f"seq expects a list or tuple of specs, but {type(specs).__name__} given")
        super().__init__("seq", log)
        self.mappers: list[MapperFunc] = [normalize(spec, log=log) for spec in specs or []]

    async def apply(self, value: Any) -> Result[Any]:
        res = value
        for mapper in self.mappers:
            res = await invoke(mapper, res)
            if isinstance(res, Err):
                self._handle_child_err(mapper, res)
                return res
        return res


class MapMapper(Mapper):
    def __init__(self, specs: Mapping[Any, Spec], log: bool = False) -> None:
        if not isinstance(specs, Mapping):
            raise TypeError(f"map expects a mapping of label to spec, but {type(specs).__name__} given")
        super().__init__("map", log)
        self.mappers: dict[Any, MapperFunc] = {
            label: normalize(spec, log=log) for label, spec in specs.items()
        }
        self._tasks: set[Task[Any]] = set()

    def _register_task(self, task: Task[Any]) -> None:
        self._tasks.add(task)
        def _cleanup(_: Task[Any]) -> None:
            self._tasks.discard(task)
        task.add_done_callback(_cleanup)

    async def apply(self, value: Any) -> Result[Any]:
        if not self.mappers:
            return {}

        loop = asyncio.get_running_loop()
        # resolved at most once: first Err, or the full result dict
        latch: Future[Result[Any]] = loop.create_future()
        results: dict[Any, Any] = {}

        def _collect(label: Any, task: Task[Result[Any]]) -> None:
            if latch.done():
                if not task.cancelled() and task.exception() is None:
                    self._handle_log(f"{self.name}: ignoring late result for {label!r}")
                return
            if task.cancelled():
                latch.cancel()
                return
            exc = task.exception()
            if exc is not None:
                latch.set_exception(exc)
                return
            res = task.result()
            if isinstance(res, Err):
                self._handle_child_err(self.mappers[label], res)
                latch.set_result(res)
                return
            results[label] = res
            if len(results) == len(self.mappers):
                latch.set_result({key: results[key] for key in self.mappers})

        for label, mapper in self.mappers.items():
            task = asyncio.create_task(invoke(mapper, value))
            self._register_task(task)
            task.add_done_callback(lambda t, label=label: _collect(label, t))

        return await latch


def seq(specs: Sequence[Spec] | None, *, log: bool = False) -> SeqMapper:
    return SeqMapper(specs, log=log)


def map(specs: Mapping[Any, Spec], *, log: bool = False) -> MapMapper:
    return MapMapper(specs, log=log)
