from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, ParamSpec, TypeAlias, TypeVar, Union

T = TypeVar("T")
P = ParamSpec("P")


@dataclass(frozen=True)
class Err:
    error: Any

    @property
    def message(self) -> str:
        return str(self.error)


Result: TypeAlias = Union[T, Err]


def is_err(res: Result[T]) -> bool:
    return isinstance(res, Err)


def is_ok(res: Result[T]) -> bool:
    return not is_err(res)


def get_err(res: Result[T]) -> Any:
    if isinstance(res, Err):
        return res.error
    return None


def unwrap(res: Result[T]) -> T:
    if isinstance(res, Err):
        if isinstance(res.error, BaseException):
            raise res.error
        raise RuntimeError(f"unwrap on Err: {res.message}")
    return res


def unwrap_or(res: Result[T], default: T) -> T:
    if isinstance(res, Err):
        return default
    return res


def err_as_value(f: Callable[P, T]) -> Callable[P, Result[T]]:
    """Return raised exceptions as ``Err`` instead of propagating them."""
    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
        try:
            return f(*args, **kwargs)
        except Exception as e:
            return Err(e)
    return wrapper
