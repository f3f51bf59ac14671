from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from crcstream.bitops import reflect
from crcstream.params import CrcParams

from ._base import BaseEngine


@dataclass(frozen=True)
class Config:
    """
    "Reflected" CRC: LSB-first register, low bits shifted out to the right.
    Used when params.reflect is True (refin = refout = true).
    """


class Engine(BaseEngine):
    reflected = True

    def initial_register(self, params: CrcParams) -> int:
        return reflect(params.init, params.width)

    def update(self, data: Iterable[int]) -> None:
        table = self._lookup
        reg = self._reg
        for b in data:
            reg = table[(reg ^ b) & 0xFF] ^ (reg >> 8)
        self._reg = reg
