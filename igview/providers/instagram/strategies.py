"""Safe accessors and ordered fallback cascades over raw export JSON.

Export documents are only known at runtime, so extractors treat them as
generic JSON values. Each fallback is a :class:`Strategy` (a shape
predicate plus a decoder), and :func:`first_match` evaluates a list of them
in order until one yields a non-empty result.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import SchemaMismatch

KeyPath = Sequence[str | int]

T = TypeVar("T")

ENTRY_ERRORS = (SchemaMismatch, ValidationError, TypeError, ValueError, OverflowError)
"""What a malformed entry can raise while being decoded."""


def dig(value: Any, *path: str | int, default: Any = None) -> Any:
    """Follow *path* through nested dicts/lists, returning *default* on any miss."""
    current = value
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
    return default if current is None else current


def first_str(value: Any, *paths: KeyPath) -> str:
    """Return the first non-empty string found at any of *paths*, else ``""``."""
    for path in paths:
        found = dig(value, *path)
        if isinstance(found, str) and found:
            return found
    return ""


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def payload_list(document: Any, keys: Sequence[str]) -> list[Any]:
    """Return the item list of a container document.

    The document itself when it is already an array, otherwise the first of
    *keys* that holds an array. Raises :class:`SchemaMismatch` when none do.
    """
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for key in keys:
            if isinstance(document.get(key), list):
                return document[key]
    raise SchemaMismatch(f"no item list under any of {list(keys)}")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """One step of a fallback cascade."""

    name: str
    decode: Callable[[Any], T]
    matches: Callable[[Any], bool] = lambda _value: True


def first_match(
    strategies: Sequence[Strategy[T]],
    value: Any,
    diagnostics: Diagnostics,
    label: str,
) -> T | None:
    """Evaluate *strategies* against *value* until one yields a truthy result.

    Shape mismatches and decoding errors advance to the next strategy and
    are recorded in *diagnostics*; nothing is raised.
    """
    for strategy in strategies:
        if not strategy.matches(value):
            diagnostics.log(f"{label}: {strategy.name} - shape not present")
            continue
        try:
            result = strategy.decode(value)
        except (SchemaMismatch, ValidationError, TypeError, ValueError, KeyError) as exc:
            diagnostics.failed(f"{label}: {strategy.name} - {exc}")
            continue
        if result:
            diagnostics.found(f"{label}: resolved via {strategy.name}")
            return result
        diagnostics.log(f"{label}: {strategy.name} - empty")
    diagnostics.failed(f"{label}: no strategy succeeded")
    return None
