"""Call-result caching for pure functions."""
from dataclasses import fields, is_dataclass
from functools import wraps
from typing import Any, Callable, Dict, NamedTuple
import json
import logging
import types

logger = logging.getLogger(__name__)

# Keyed by repr; their __dict__ does not identify them
_OPAQUE_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int


def _canonical(value: Any) -> Any:
    """Convert a value into a JSON-encodable structure with a stable shape."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if is_dataclass(value) and not isinstance(value, type):
        return {
            "__dataclass__": type(value).__qualname__,
            "fields": [[f.name, _canonical(getattr(value, f.name))] for f in fields(value)]
        }
    if isinstance(value, dict):
        items = [[_canonical(k), _canonical(v)] for k, v in value.items()]
        return {"__dict__": sorted(items, key=json.dumps)}
    if isinstance(value, (set, frozenset)):
        return {"__set__": sorted((_canonical(v) for v in value), key=json.dumps)}
    if isinstance(value, tuple):
        return {"__tuple__": [_canonical(v) for v in value]}
    if isinstance(value, list):
        return [_canonical(v) for v in value]
    if hasattr(value, "__dict__") and not isinstance(value, _OPAQUE_TYPES):
        return {
            "__object__": type(value).__qualname__,
            "fields": [[name, _canonical(v)] for name, v in sorted(vars(value).items())]
        }
    return {"__repr__": repr(value)}


def make_key(args: tuple, kwargs: Dict[str, Any]) -> str:
    """
    Serialize an argument list into a cache key.

    Positional order is significant; keyword arguments are sorted by name.
    Equal argument lists always give equal keys.
    """
    payload = [
        [_canonical(arg) for arg in args],
        [[name, _canonical(kwargs[name])] for name in sorted(kwargs)]
    ]
    return json.dumps(payload, separators=(",", ":"))


def memoize(fn: Callable) -> Callable:
    """
    Cache results of a pure function, keyed by its serialized arguments.

    The cache is unbounded and lives as long as the wrapper. Exceptions
    raised by fn propagate and are not cached.

    Example:
        >>> @memoize
        ... def add(a, b):
        ...     return a + b
        >>> add(1, 2)
        3
        >>> add.cache_info().hits
        0
    """
    cache: Dict[str, Any] = {}
    stats = {"hits": 0, "misses": 0}

    @wraps(fn)
    def wrapper(*args, **kwargs):
        key = make_key(args, kwargs)
        if key in cache:
            stats["hits"] += 1
            return cache[key]

        stats["misses"] += 1
        result = fn(*args, **kwargs)
        cache[key] = result
        logger.debug(f"Cached {fn.__name__}: {key}")
        return result

    def cache_info() -> CacheInfo:
        return CacheInfo(stats["hits"], stats["misses"], len(cache))

    def cache_clear():
        cache.clear()
        stats["hits"] = stats["misses"] = 0

    wrapper.cache_info = cache_info
    wrapper.cache_clear = cache_clear
    return wrapper
