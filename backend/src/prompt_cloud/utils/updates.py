"""Per-field update instructions for partial updates.

A PUT body distinguishes three cases per field: the key is absent (leave the
column alone), the key is ``null`` (clear the column) or the key carries a
value (write it). ``field_update`` reads that distinction off a pydantic
model through ``model_fields_set``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel


T = TypeVar("T")


@dataclass(frozen=True)
class Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


@dataclass(frozen=True)
class Clear:
    def __repr__(self) -> str:
        return "CLEAR"


@dataclass(frozen=True)
class SetTo(Generic[T]):
    value: T


FieldUpdate = Union[Unchanged, Clear, SetTo[T]]

UNCHANGED = Unchanged()
CLEAR = Clear()


def field_update(model: BaseModel, name: str) -> FieldUpdate[Any]:
    if name not in model.model_fields_set:
        return UNCHANGED
    value = getattr(model, name)
    if value is None:
        return CLEAR
    return SetTo(value)


def is_unchanged(update: FieldUpdate[Any]) -> bool:
    return isinstance(update, Unchanged)
