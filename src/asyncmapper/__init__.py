"""
asyncmapper - composable async data-transformation functions for Python.

Mappers take one input value and produce one ``Result``. Build them from
shorthand specs (path strings, functions, lists, dicts) with ``normalize``,
or directly with ``exactly``, ``get``, ``seq`` and ``map``.
"""

from .util import Result, Err, is_err, is_ok, unwrap, unwrap_or, get_err, err_as_value
from .path import get_path, split_path
from .mapper import Mapper, FuncMapper, SyncMapper, PathMapper, as_mapper, is_async_mapper, asyncify, exactly, get, invoke
from .compose import SeqMapper, MapMapper, seq, map, normalize
from .async_util import from_callback, to_callback

__version__ = "0.1.0"

__all__ = [
    "Mapper",
    "FuncMapper",
    "SyncMapper",
    "PathMapper",
    "SeqMapper",
    "MapMapper",
    "exactly",
    "get",
    "seq",
    "map",
    "normalize",
    "asyncify",
    "as_mapper",
    "is_async_mapper",
    "invoke",
    "get_path",
    "split_path",
    "from_callback",
    "to_callback",
    "Result",
    "Err",
    "is_err",
    "is_ok",
    "unwrap",
    "unwrap_or",
    "get_err",
    "err_as_value",
]
