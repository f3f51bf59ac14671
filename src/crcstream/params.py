# crcstream/params.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from crcstream.bitops import mask


_KNOWN_KEYS = {"width", "poly", "init", "refin", "refout", "xorout", "check", "residue", "name", "alias"}


@dataclass(frozen=True)
class CrcParams:
    """
    One CRC variant.

    width:   register width in bits (positive multiple of 8)
    poly:    generator polynomial, MSB-first form (e.g. 0x04C11DB7 for CRC-32)
    init:    initial register value, MSB-first form
    reflect: process input LSB-first and emit the reflected register.
             Covers refin AND refout together; variants that set them
             differently (e.g. CRC-12/UMTS) cannot be expressed.
    xorout:  XORed into the register once, after the last byte

    name/check are bookkeeping only: check is the expected CRC of b"123456789".
    """
    width: int
    poly: int
    init: int = 0
    reflect: bool = False
    xorout: int = 0
    name: str = "CUSTOM"
    check: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise TypeError("width must be int")
        if self.width <= 0 or self.width % 8 != 0:
            raise ValueError(f"width must be a positive multiple of 8, got {self.width}")
        if not isinstance(self.reflect, bool):
            raise TypeError("reflect must be bool")

        for field_name in ("poly", "init", "xorout", "check"):
            v = getattr(self, field_name)
            if v is None and field_name == "check":
                continue
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{field_name} must be int")
            if not (0 <= v <= self.mask):
                raise ValueError(f"{field_name}=0x{v:x} does not fit in width={self.width} bits")

    @property
    def mask(self) -> int:
        return mask(self.width)

    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

    def describe(self) -> str:
        """Render as a catalogue-style parameter line (parseable by from_string)."""
        w = self.hex_digits
        refl = "true" if self.reflect else "false"
        line = (
            f"width={self.width} poly=0x{self.poly:0{w}x} init=0x{self.init:0{w}x} "
            f"refin={refl} refout={refl} xorout=0x{self.xorout:0{w}x}"
        )
        if self.check is not None:
            line += f" check=0x{self.check:0{w}x}"
        return line + f' name="{self.name}"'

    @classmethod
    def from_string(cls, line: str) -> "CrcParams":
        """
        Parse a catalogue-style line:

          width=16 poly=0x1021 init=0xffff refin=false refout=false xorout=0x0000 check=0x29b1 name="CRC-16/IBM-3740"

        width and poly are required. residue and alias are accepted and ignored.
        """
        if not isinstance(line, str):
            raise TypeError("from_string: line must be str")

        try:
            m = {k: v for k, v in (field.split("=", 1) for field in line.split())}
        except ValueError:
            raise ValueError(f"malformed CRC parameter line: {line!r}") from None

        if "width" not in m or "poly" not in m:
            raise ValueError('the required "width" or "poly" field is missing')
        invalid = set(m) - _KNOWN_KEYS
        if invalid:
            raise ValueError("invalid parameters: " + ", ".join(sorted(invalid)))

        refin = _to_bool(m.get("refin", "false"))
        refout = _to_bool(m.get("refout", "false"))
        if refin != refout:
            raise ValueError("refin and refout must match (only a combined reflect flag is supported)")

        check = m.get("check")
        return cls(
            width=_to_int(m["width"]),
            poly=_to_int(m["poly"]),
            init=_to_int(m.get("init", "0")),
            reflect=refin,
            xorout=_to_int(m.get("xorout", "0")),
            name=_unquote(m.get("name", "CUSTOM")),
            check=_to_int(check) if check is not None else None,
        )


# ----------------------------
# Internal
# ----------------------------

def _unquote(s: str) -> str:
    return s[1:-1] if len(s) >= 2 and s.startswith('"') and s.endswith('"') else s


def _to_bool(s: str) -> bool:
    if s.lower() not in ("true", "false"):
        raise ValueError(f"invalid bool value: {s!r}")
    return s.lower() == "true"


def _to_int(s: str) -> int:
    try:
        return int(s, 0)
    except ValueError:
        raise ValueError(f"invalid int value: {s!r}") from None
