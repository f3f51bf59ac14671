from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from crcstream.params import CrcParams

from ._base import BaseEngine


@dataclass(frozen=True)
class Config:
    """
    "Normal" CRC: MSB-first register, high bits shifted out to the left.
    Used when params.reflect is False.
    """


class Engine(BaseEngine):
    reflected = False

    def initial_register(self, params: CrcParams) -> int:
        return params.init

    def update(self, data: Iterable[int]) -> None:
        # Keep this loop free of calls; it runs once per input byte.
        table = self._lookup
        shift = self.width - 8
        low = (1 << shift) - 1
        reg = self._reg
        for b in data:
            reg = table[((reg >> shift) & 0xFF) ^ b] ^ ((reg & low) << 8)
        self._reg = reg
