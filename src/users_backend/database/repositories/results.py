"""Explicit outcome types returned by repositories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class StoreErrorKind(StrEnum):
    """Why a repository operation did not produce a value."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


@dataclass(slots=True, frozen=True)
class Stored(Generic[T]):
    """Successful repository outcome."""

    value: T


@dataclass(slots=True, frozen=True)
class StoreError:
    """Failed repository outcome."""

    kind: StoreErrorKind
    detail: str = ""


StoreResult = Stored[T] | StoreError

__all__ = ["StoreError", "StoreErrorKind", "StoreResult", "Stored"]
