# crcstream/sink.py
from __future__ import annotations

from typing import Optional

from crcstream.value import CrcValue


class FinalSink:
    """
    Terminal sink that stores the single CRC value a pipeline delivers.

    add() may run once; reading `value` before that is a caller bug.
    """

    def __init__(self) -> None:
        self._value: Optional[CrcValue] = None
        self._closed = False

    @property
    def value(self) -> CrcValue:
        if self._value is None:
            raise RuntimeError("FinalSink.value read before a CRC was delivered")
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def add(self, data: CrcValue) -> None:
        if not isinstance(data, CrcValue):
            raise TypeError("FinalSink.add: expected CrcValue")
        if self._value is not None:
            raise RuntimeError("FinalSink.add: a CRC value was already delivered")
        self._value = data

    def close(self) -> None:
        if self._value is None:
            raise RuntimeError("FinalSink.close: closed without a CRC value")
        self._closed = True
