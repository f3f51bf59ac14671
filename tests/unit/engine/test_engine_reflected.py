import numpy as np
import pytest

from crcstream.bitops import reflect
from crcstream.engine.modules.reflected import Engine
from crcstream.numeric import stage as numeric_stage
from crcstream.params import CrcParams
from crcstream.table import build_table
from tests.conftest import CHECK_INPUT


def _engine(params: CrcParams, module=None) -> Engine:
    backend = numeric_stage.resolve(params.width, cfg=numeric_stage.Config(module=module))
    return Engine(params, backend=backend, table=build_table(params, backend))


def test_register_starts_at_reflected_init():
    e = _engine(CrcParams(width=16, poly=0x1021, init=0x1D0F, reflect=True))
    assert int(e.accumulator) == reflect(0x1D0F, 16)


def test_crc32_register_before_final_xor():
    e = _engine(CrcParams(width=32, poly=0x04C11DB7, init=0xFFFFFFFF, reflect=True))
    e.update(CHECK_INPUT)
    assert int(e.accumulator) == 0xCBF43926 ^ 0xFFFFFFFF


def test_crc16_arc_register():
    e = _engine(CrcParams(width=16, poly=0x8005, reflect=True))
    e.update(CHECK_INPUT)
    assert int(e.accumulator) == 0xBB3D


def test_crc8_maxim_register():
    e = _engine(CrcParams(width=8, poly=0x31, reflect=True))
    e.update(CHECK_INPUT)
    assert int(e.accumulator) == 0xA1


def test_accepts_numpy_byte_views():
    e = _engine(CrcParams(width=16, poly=0x8005, reflect=True))
    e.update(memoryview(np.frombuffer(CHECK_INPUT, dtype=np.uint8)))
    assert int(e.accumulator) == 0xBB3D


def test_native_and_bigint_agree_at_64_bits():
    p = CrcParams(width=64, poly=0x42F0E1EBA9EA3693, init=(1 << 64) - 1, reflect=True)
    native = _engine(p, module="native")
    bigint = _engine(p, module="bigint")
    data = bytes(range(256)) * 4
    native.update(data)
    bigint.update(data)
    assert isinstance(native.accumulator, np.uint64)
    assert int(native.accumulator) == bigint.accumulator


def test_rejects_normal_params():
    p = CrcParams(width=16, poly=0x1021, reflect=False)
    backend = numeric_stage.resolve(16, cfg=numeric_stage.Config())
    with pytest.raises(ValueError):
        Engine(p, backend=backend, table=build_table(p, backend))
