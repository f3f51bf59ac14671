# crcstream/bitops.py
from __future__ import annotations

from typing import Union

import numpy as np


IntLike = Union[int, np.integer]


def _reflect_int(x: int, width: int) -> int:
    r = 0
    for _ in range(width):
        r = (r << 1) | (x & 1)
        x >>= 1
    return r


def reflect(value: IntLike, width: int) -> IntLike:
    """
    Reverse the order of the low `width` bits of `value`.

      reflect(0x80, 8)     -> 0x01
      reflect(0x3E23, 3)   -> 0b110 (low bits 011 reversed)

    Python ints come back as ints; numpy integers come back as the same numpy type,
    so callers keep whatever representation they started with.
    """
    if isinstance(width, bool) or not isinstance(width, int) or width < 0:
        raise ValueError(f"width must be a non-negative int, got {width!r}")

    if isinstance(value, np.integer):
        v = int(value)
        if v < 0:
            raise ValueError("reflect: value must be non-negative")
        return type(value)(_reflect_int(v, width))

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("reflect: value must be an int or numpy integer")
    if value < 0:
        raise ValueError("reflect: value must be non-negative")
    return _reflect_int(value, width)


def mask(width: int) -> int:
    """All-ones value of `width` bits."""
    return (1 << width) - 1

