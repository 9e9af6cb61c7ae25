from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeAlias

from .path import Path, get_path, split_path
from .util import Err, Result

logger = logging.getLogger(__name__)

MapperFunc: TypeAlias = Callable[[Any], Awaitable[Result[Any]]]
SyncFunc: TypeAlias = Callable[[Any], Any]


def as_mapper(fn: Callable[[Any], Awaitable[Any]]) -> Callable[[Any], Awaitable[Any]]:
    """
    Tag a callable as an already-canonical async mapper.

    Coroutine functions need no tag. Use this for plain functions that
    return an awaitable, or objects whose ``__call__`` is ``async def``.
    """
    inspect.markcoroutinefunction(fn)
    return fn


def is_async_mapper(fn: Any) -> bool:
    if isinstance(fn, Mapper):
        return True
    return inspect.iscoroutinefunction(fn)


async def invoke(mapper: MapperFunc, value: Any) -> Result[Any]:
    """Await ``mapper`` on ``value``, folding a raised exception into ``Err``."""
    try:
        return await mapper(value)
    except Exception as e:
        return Err(e)


class Mapper(ABC):

    '''
    canonical async mapper
    '''

    def __init__(self, name: str | None = None, log: bool = False) -> None:
        self.name = name or type(self).__name__
        self.log = log

    @abstractmethod
    async def apply(self, value: Any) -> Result[Any]: ...

    async def __call__(self, value: Any) -> Result[Any]:
        return await self.apply(value)

    def __rshift__(self, other: Any) -> Mapper:
        from .compose import SeqMapper, seq

        if isinstance(self, SeqMapper):
            return seq([*self.mappers, other], log=self.log)
        return seq([self, other], log=self.log)

    def __rrshift__(self, other: Any) -> Mapper:
        from .compose import seq

        return seq([other, self], log=self.log)

    def run_sync(self, value: Any) -> Result[Any]:
        """Run to completion on a fresh event loop. Not for use inside a running loop."""
        return asyncio.run(invoke(self, value))

    def _handle_log(self, val: Any) -> None:
        if self.log:
            logger.info(val)

    def _handle_err(self, err: Err) -> None:
        if self.log:
            logger.warning("%s failed: %s", self.name, err.message)

    def _handle_child_err(self, child: Any, err: Err) -> None:
        # a logging Mapper child already reported it
        if isinstance(child, Mapper) and child.log:
            return
        self._handle_err(err)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FuncMapper(Mapper):
    def __init__(self, func: MapperFunc, name: str | None = None, log: bool = False) -> None:
        super().__init__(name or getattr(func, "__name__", None), log)
        self.func = func

    async def apply(self, value: Any) -> Result[Any]:
        res = await invoke(self.func, value)
        if isinstance(res, Err):
            self._handle_err(res)
        return res


class SyncMapper(Mapper):
    def __init__(self, fn: SyncFunc, name: str | None = None, log: bool = False) -> None:
        super().__init__(name or getattr(fn, "__name__", "sync"), log)
        self.fn = fn

    async def apply(self, value: Any) -> Result[Any]:
        try:
            res = self.fn(value)
        except Exception as e:
            err = Err(e)
            self._handle_err(err)
            return err
        if isinstance(res, Err):
            self._handle_err(res)
        return res


class PathMapper(Mapper):
    def __init__(self, path: Path, log: bool = False) -> None:
        self.segments = split_path(path)
        super().__init__("get:" + ".".join(str(s) for s in self.segments), log)

    async def apply(self, value: Any) -> Result[Any]:
        return get_path(value, self.segments)


def asyncify(fn: SyncFunc, *, log: bool = False) -> SyncMapper:
    return SyncMapper(fn, log=log)


def exactly(value: Any) -> SyncMapper:
    return SyncMapper(lambda _: value, name=f"exactly:{value!r}")


def get(path: Path) -> PathMapper:
    return PathMapper(path)
