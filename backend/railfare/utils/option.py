# backend/railfare/utils/option.py
"""
Explicit optional value: Some(value) or NOTHING.

Used for the return date so that "absent" is a visible case for every consumer
instead of a None hiding in an attribute.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Some(Generic[T]):
    value: T

    def get_or_else(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Some[U]":
        return Some(fn(self.value))


@dataclass(frozen=True)
class Nothing:
    def get_or_else(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[T], U]) -> "Nothing":
        return self


NOTHING = Nothing()

Option = Union[Some[T], Nothing]
