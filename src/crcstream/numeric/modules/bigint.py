from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple


@dataclass(frozen=True)
class Config:
    """
    Arbitrary-precision storage: plain Python ints, any width.
    """


def supports(width: int, *, cfg: Any) -> bool:
    return width > 0


def store(value: int, width: int, *, cfg: Any) -> int:
    return int(value)


def make_table(entries: Sequence[int], width: int, *, cfg: Any) -> Tuple[int, ...]:
    return tuple(int(e) for e in entries)


def as_ints(table: Tuple[int, ...]) -> Tuple[int, ...]:
    return table
