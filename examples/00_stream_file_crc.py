import sys
from pathlib import Path

from crcstream.params import CrcParams
from crcstream.pipeline import CrcConfig, CrcPipeline


CRC32 = CrcParams.from_string(
    'width=32 poly=0x04c11db7 init=0xffffffff refin=true refout=true xorout=0xffffffff '
    'check=0xcbf43926 name="CRC-32/ISO-HDLC"'
)


if __name__ == "__main__":
    path = Path(sys.argv[1] if len(sys.argv) > 1 else __file__)

    p = CrcPipeline(CrcConfig(params=CRC32))
    with path.open("rb") as f:
        while True:
            chunk = f.read(64 * 1024)
            if not chunk:
                break
            p.add(chunk)
    p.close()

    print(f"{CRC32.name} {path}: 0x{p.value:08x} ({p.bytes_in} bytes)")
