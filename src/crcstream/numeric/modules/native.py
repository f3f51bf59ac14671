from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

import numpy as np


_DTYPES = (np.uint8, np.uint16, np.uint32, np.uint64)


@dataclass(frozen=True)
class Config:
    """
    Fixed-width unsigned storage backed by numpy dtypes.

    Values live in the smallest numpy unsigned dtype that holds `width` bits
    (uint8 / uint16 / uint32 / uint64), so widths above 64 are not supported.
    """
    max_width: int = 64


def dtype_for(width: int) -> type:
    for dt in _DTYPES:
        if np.iinfo(dt).bits >= width:
            return dt
    raise ValueError(f"no native unsigned dtype holds width={width}")


def supports(width: int, *, cfg: Any) -> bool:
    max_width = _get_max_width(cfg)
    return 0 < width <= max_width and width <= np.iinfo(_DTYPES[-1]).bits


def store(value: int, width: int, *, cfg: Any) -> np.unsignedinteger:
    """Wrap a non-negative int (already < 2**width) in its native dtype."""
    return dtype_for(width)(value)


def make_table(entries: Sequence[int], width: int, *, cfg: Any) -> np.ndarray:
    table = np.array(entries, dtype=dtype_for(width))
    table.flags.writeable = False
    return table


def as_ints(table: np.ndarray) -> List[int]:
    """
    Hot-loop view of a table: plain Python ints.
    Indexing numpy arrays per byte is far slower than list indexing.
    """
    return table.tolist()


# ----------------------------
# Internal
# ----------------------------

def _get_max_width(cfg: Any) -> int:
    max_width = getattr(cfg, "max_width", None)
    if max_width is None:
        raise AttributeError("cfg missing required int attribute: max_width")
    if not isinstance(max_width, int):
        raise TypeError("cfg.max_width must be int")
    return max_width
