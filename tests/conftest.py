from __future__ import annotations

from crcstream.params import CrcParams


CHECK_INPUT = b"123456789"

# Catalogue entries with their published check values (CRC of b"123456789").
KNOWN_VECTORS = [
    CrcParams(width=8, poly=0x07, init=0x00, reflect=False, xorout=0x00, name="CRC-8/SMBUS", check=0xF4),
    CrcParams(width=8, poly=0x31, init=0x00, reflect=True, xorout=0x00, name="CRC-8/MAXIM-DOW", check=0xA1),
    CrcParams(width=8, poly=0x07, init=0xFF, reflect=True, xorout=0x00, name="CRC-8/ROHC", check=0xD0),
    CrcParams(width=16, poly=0x8005, init=0x0000, reflect=True, xorout=0x0000, name="CRC-16/ARC", check=0xBB3D),
    CrcParams(width=16, poly=0x1021, init=0xFFFF, reflect=False, xorout=0x0000, name="CRC-16/IBM-3740", check=0x29B1),
    CrcParams(width=16, poly=0x1021, init=0x0000, reflect=False, xorout=0x0000, name="CRC-16/XMODEM", check=0x31C3),
    CrcParams(width=16, poly=0x1021, init=0x0000, reflect=True, xorout=0x0000, name="CRC-16/KERMIT", check=0x2189),
    CrcParams(width=24, poly=0x864CFB, init=0xB704CE, reflect=False, xorout=0x000000, name="CRC-24/OPENPGP", check=0x21CF02),
    CrcParams(width=32, poly=0x04C11DB7, init=0xFFFFFFFF, reflect=True, xorout=0xFFFFFFFF, name="CRC-32/ISO-HDLC", check=0xCBF43926),
    CrcParams(width=32, poly=0x04C11DB7, init=0xFFFFFFFF, reflect=False, xorout=0xFFFFFFFF, name="CRC-32/BZIP2", check=0xFC891918),
    CrcParams(width=32, poly=0x04C11DB7, init=0xFFFFFFFF, reflect=False, xorout=0x00000000, name="CRC-32/MPEG-2", check=0x0376E6E7),
    CrcParams(width=32, poly=0x1EDC6F41, init=0xFFFFFFFF, reflect=True, xorout=0xFFFFFFFF, name="CRC-32/ISCSI", check=0xE3069283),
    CrcParams(width=40, poly=0x0004820009, init=0x0000000000, reflect=False, xorout=0xFFFFFFFFFF, name="CRC-40/GSM", check=0xD4164FC646),
    CrcParams(width=64, poly=0x42F0E1EBA9EA3693, init=0x0, reflect=False, xorout=0x0, name="CRC-64/ECMA-182", check=0x6C40DF5F0B497347),
    CrcParams(width=64, poly=0x000000000000001B, init=0xFFFFFFFFFFFFFFFF, reflect=True, xorout=0xFFFFFFFFFFFFFFFF, name="CRC-64/GO-ISO", check=0xB90956C775A41001),
    CrcParams(width=64, poly=0x42F0E1EBA9EA3693, init=0xFFFFFFFFFFFFFFFF, reflect=False, xorout=0xFFFFFFFFFFFFFFFF, name="CRC-64/WE", check=0x62EC59E3F1A4F00A),
    CrcParams(width=64, poly=0x42F0E1EBA9EA3693, init=0xFFFFFFFFFFFFFFFF, reflect=True, xorout=0xFFFFFFFFFFFFFFFF, name="CRC-64/XZ", check=0x995DC9BBDF1939FA),
]

CRC32 = KNOWN_VECTORS[8]

# No catalogue entry is wider than 64 bits and byte-aligned; these are only
# checked against the bitwise reference below.
WIDE_PARAMS = [
    CrcParams(width=72, poly=0x1_0000_0000_0000_001B, init=0, reflect=False, xorout=0, name="WIDE-72"),
    CrcParams(width=96, poly=0x8000_0000_0000_0000_0000_0007, init=(1 << 96) - 1, reflect=True, xorout=(1 << 96) - 1, name="WIDE-96"),
    CrcParams(width=128, poly=0x1_0000_0000_0000_0000_0000_0087, init=0x0123456789ABCDEF0123456789ABCDEF, reflect=False, xorout=0xFF, name="WIDE-128"),
    CrcParams(width=128, poly=0x87, init=(1 << 128) - 1, reflect=True, xorout=0, name="WIDE-128R"),
]


# Non-palindromic init values, so a missing init reflection shows up.
SKEWED_PARAMS = [
    CrcParams(width=16, poly=0x1021, init=0x1234, reflect=True, xorout=0x00FF, name="SKEW-16R"),
    CrcParams(width=32, poly=0x04C11DB7, init=0x00C0FFEE, reflect=True, xorout=0, name="SKEW-32R"),
    CrcParams(width=24, poly=0x864CFB, init=0x000001, reflect=False, xorout=0x123456, name="SKEW-24"),
]

def _rev(x: int, width: int) -> int:
    r = 0
    for _ in range(width):
        r = (r << 1) | (x & 1)
        x >>= 1
    return r


def reference_crc(data: bytes, params: CrcParams) -> int:
    """
    Slow bit-at-a-time CRC (MSB-first register, reflection applied to input bytes
    and the final register). Independent of the table-driven code under test.
    """
    w = params.width
    m = (1 << w) - 1
    top = 1 << (w - 1)
    reg = params.init
    for b in data:
        if params.reflect:
            b = _rev(b, 8)
        reg ^= b << (w - 8)
        for _ in range(8):
            if reg & top:
                reg = ((reg << 1) ^ params.poly) & m
            else:
                reg = (reg << 1) & m
    if params.reflect:
        reg = _rev(reg, w)
    return reg ^ params.xorout


def sample_payload(n: int = 1000, seed: int = 1234) -> bytes:
    """Deterministic, non-trivial bytes."""
    import random

    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(n))
