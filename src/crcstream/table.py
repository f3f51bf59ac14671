# crcstream/table.py
from __future__ import annotations

from functools import lru_cache
from typing import Any, List
import logging

from crcstream.bitops import mask, reflect
from crcstream.numeric.stage import Backend
from crcstream.params import CrcParams


logger = logging.getLogger(__name__)


def normal_entries(width: int, poly: int) -> List[int]:
    """
    MSB-first table: each byte is placed in the top 8 bits of the register
    and shifted out through 8 steps of polynomial division.
    """
    m = mask(width)
    top = 1 << (width - 1)
    out = []
    for i in range(256):
        crc = i << (width - 8)
        for _ in range(8):
            if crc & top:
                crc = ((crc << 1) ^ poly) & m
            else:
                crc = (crc << 1) & m
        out.append(crc)
    return out


def reflected_entries(width: int, poly: int) -> List[int]:
    """
    LSB-first table. `poly` is given MSB-first and reflected here.
    """
    rpoly = reflect(poly, width)
    out = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ rpoly
            else:
                crc >>= 1
        out.append(crc)
    return out


@lru_cache(maxsize=64)
def _cached_table(width: int, poly: int, reflected: bool, backend: Backend) -> Any:
    """
    Requires backend (and its module_cfg) to be hashable (frozen dataclass Configs are hashable).
    """
    entries = reflected_entries(width, poly) if reflected else normal_entries(width, poly)
    logger.debug(
        "built %s table width=%d poly=0x%x backend=%s",
        "reflected" if reflected else "normal", width, poly, backend.name,
    )
    return backend.make_table(entries)


def build_table(params: CrcParams, backend: Backend) -> Any:
    """
    256-entry lookup table for `params`, stored the way `backend` stores values
    (read-only numpy array for "native", tuple of ints for "bigint").

    Tables depend only on (width, poly, reflect) and are cached, so every
    pipeline over the same variant shares one read-only table.
    """
    if backend.width != params.width:
        raise ValueError(f"backend width {backend.width} != params width {params.width}")
    return _cached_table(params.width, params.poly, params.reflect, backend)


@lru_cache(maxsize=64)
def _cached_lookup(width: int, poly: int, reflected: bool, backend: Backend) -> tuple:
    return tuple(backend.as_ints(_cached_table(width, poly, reflected, backend)))


def build_lookup(params: CrcParams, backend: Backend) -> tuple:
    """
    Hot-loop view of build_table(params, backend): a tuple of Python ints,
    cached alongside the table so engines over one variant share it too.
    """
    if backend.width != params.width:
        raise ValueError(f"backend width {backend.width} != params width {params.width}")
    return _cached_lookup(params.width, params.poly, params.reflect, backend)
