# crcstream/value.py
from __future__ import annotations

from typing import Any, Optional, Union

import numpy as np

from crcstream.bitops import mask


_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Marker for "not a numeric type at all" (as opposed to "numeric but not equal").
_FOREIGN = object()


class CrcValue:
    """
    A finished CRC.

    The stored value is either a numpy unsigned scalar (native backend) or a
    non-negative Python int (bigint backend). Comparison and hashing only see
    the unsigned numeric value, so the same CRC computed by either backend
    compares and hashes equal.

    Comparing with:
      - CrcValue: only values of the same width are comparable
      - Python and numpy ints: must already be in [0, 2**width); negative or wider ints
        are never equal, so equal values always hash alike
    """

    __slots__ = ("_width", "_value", "_int")

    def __init__(self, width: int, value: Union[int, np.unsignedinteger]):
        if isinstance(value, np.integer):
            if not isinstance(value, np.unsignedinteger):
                raise TypeError("CrcValue: numpy values must be unsigned")
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("CrcValue: value must be an int or numpy unsigned integer")

        v = int(value)
        if not (0 <= v <= mask(width)):
            raise ValueError(f"CrcValue: 0x{v:x} does not fit in width={width} bits")

        self._width = width
        self._value = value
        self._int = v

    @property
    def width(self) -> int:
        return self._width

    @property
    def value(self) -> Union[int, np.unsignedinteger]:
        """The stored value, in whichever representation produced it."""
        return self._value

    # ---- numeric protocol ----

    def __int__(self) -> int:
        return self._int

    def __index__(self) -> int:
        return self._int

    def __hash__(self) -> int:
        return hash(self._int)

    def _other_int(self, other: Any) -> Any:
        if isinstance(other, CrcValue):
            return other._int if other._width == self._width else None
        if isinstance(other, bool):
            return _FOREIGN
        if isinstance(other, (int, np.integer)):
            other = int(other)
            return other if 0 <= other <= mask(self._width) else None
        return _FOREIGN

    def __eq__(self, other: Any) -> bool:
        o = self._other_int(other)
        if o is _FOREIGN:
            return NotImplemented
        return o is not None and self._int == o

    def __ne__(self, other: Any) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def _ordered(self, other: Any) -> Optional[int]:
        o = self._other_int(other)
        return None if o is _FOREIGN or o is None else o

    def __lt__(self, other: Any) -> bool:
        o = self._ordered(other)
        return NotImplemented if o is None else self._int < o

    def __le__(self, other: Any) -> bool:
        o = self._ordered(other)
        return NotImplemented if o is None else self._int <= o

    def __gt__(self, other: Any) -> bool:
        o = self._ordered(other)
        return NotImplemented if o is None else self._int > o

    def __ge__(self, other: Any) -> bool:
        o = self._ordered(other)
        return NotImplemented if o is None else self._int >= o

    # ---- text ----

    def __str__(self) -> str:
        return self.to_radix_string(10)

    def __repr__(self) -> str:
        return f"CrcValue(width={self._width}, value=0x{self._int:0{(self._width + 3) // 4}x})"

    def __format__(self, spec: str) -> str:
        return format(self._int, spec)

    def to_radix_string(self, radix: int) -> str:
        """Digits of the value in `radix` (2..36), lowercase, no prefix."""
        if isinstance(radix, bool) or not isinstance(radix, int) or not (2 <= radix <= 36):
            raise ValueError(f"radix must be an int in 2..36, got {radix!r}")
        if radix == 10:
            return str(self._int)
        if radix == 16:
            return f"{self._int:x}"

        v = self._int
        if v == 0:
            return "0"
        out = []
        while v:
            v, d = divmod(v, radix)
            out.append(_DIGITS[d])
        return "".join(reversed(out))

    def to_bytes(self, byteorder: str = "big") -> bytes:
        """Serialize in ceil(width / 8) bytes."""
        return self._int.to_bytes((self._width + 7) // 8, byteorder)
