from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from typing import Any

"""Named cell converters for YAML import configs.

A config file cannot carry Python callables, so ``convert`` entries name one
of the functions registered here. Every converter passes None through, since
empty cells are already None when they reach it.
"""

__all__ = [
    "CONVERTERS",
    "get_converter",
]

_TRUE = {"TRUE", "YES", "Y", "1"}
_FALSE = {"FALSE", "NO", "N", "0"}


def _none_safe(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def wrapper(value: Any) -> Any:
        return None if value is None else fn(value)
    wrapper.__name__ = fn.__name__
    return wrapper


def _to_str(value: Any) -> str:
    # 12.0 read from a numeric cell should become "12", not "12.0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    return int(str(value).strip())


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().upper()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value).strip())


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "str": _none_safe(_to_str),
    "int": _none_safe(_to_int),
    "float": _none_safe(float),
    "bool": _none_safe(_to_bool),
    "strip": _none_safe(lambda v: str(v).strip()),
    "upper": _none_safe(lambda v: str(v).upper()),
    "lower": _none_safe(lambda v: str(v).lower()),
    "date": _none_safe(_to_date),
    "datetime": _none_safe(_to_datetime),
}


def get_converter(name: str) -> Callable[[Any], Any]:
    try:
        return CONVERTERS[name]
    except KeyError:
        raise KeyError(f"unknown converter '{name}'; known: {sorted(CONVERTERS)}") from None
