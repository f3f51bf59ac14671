# crcstream/pipeline.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union
import logging

import numpy as np

from crcstream.engine import stage as engine_stage
from crcstream.numeric import stage as numeric_stage
from crcstream.params import CrcParams
from crcstream.sink import FinalSink
from crcstream.value import CrcValue


logger = logging.getLogger(__name__)

CHECK_INPUT = b"123456789"


class PipelineState(Enum):
    OPEN = "open"  # accepting chunks
    CLOSED = "closed"  # CRC delivered, nothing more accepted


@dataclass(frozen=True)
class CrcConfig:
    """
    Everything a pipeline needs.

    params:  the CRC variant
    engine:  engine stage config (None module -> follow params.reflect)
    numeric: numeric stage config (None module -> "native" if the width fits, else "bigint")
    """
    params: CrcParams
    engine: engine_stage.Config = field(default_factory=engine_stage.Config)
    numeric: numeric_stage.Config = field(default_factory=numeric_stage.Config)


class CrcPipeline:
    """
    Streaming CRC: push chunks with add()/add_slice(), then close() once.

    close() XORs the final mask into the register, delivers exactly one
    CrcValue to `output` (add() then close()), and moves the pipeline to
    CLOSED. Any later add/close is a caller bug and raises RuntimeError.

    `output` is anything with add(CrcValue) and close(); defaults to a FinalSink.
    """

    def __init__(self, cfg: CrcConfig, output: Any = None):
        if not isinstance(cfg, CrcConfig):
            raise TypeError("CrcPipeline: cfg must be CrcConfig")

        self.cfg = cfg
        self.output = output if output is not None else FinalSink()
        backend = numeric_stage.resolve(cfg.params.width, cfg=cfg.numeric)
        self.engine = engine_stage.build_engine(cfg.params, cfg=cfg.engine, backend=backend)

        self.state = PipelineState.OPEN
        self.bytes_in = 0
        self._result: Optional[CrcValue] = None

    @property
    def closed(self) -> bool:
        return self.state is PipelineState.CLOSED

    @property
    def accumulator(self) -> Any:
        """Running register (final XOR not applied)."""
        return self.engine.accumulator

    @property
    def value(self) -> CrcValue:
        if self._result is None:
            raise RuntimeError("CrcPipeline.value read before close()")
        return self._result

    def add(self, chunk: Any) -> None:
        self.add_slice(chunk, 0, None, is_last=False)

    def add_slice(self, chunk: Any, start: int, end: Optional[int], is_last: bool = False) -> None:
        """
        Feed chunk[start:end] (end=None -> to the end). Closes afterwards if is_last.
        """
        if self.closed:
            raise RuntimeError("CrcPipeline: bytes added after close()")

        view = _as_byte_view(chunk)
        n = len(view)
        if end is None:
            end = n
        if not (0 <= start <= end <= n):
            raise IndexError(f"add_slice: invalid range [{start}:{end}] for chunk of length {n}")

        if end > start:
            self.engine.update(view[start:end])
            self.bytes_in += end - start

        if is_last:
            self.close()

    def close(self) -> None:
        if self.closed:
            raise RuntimeError("CrcPipeline: close() called twice")

        params = self.cfg.params
        backend = self.engine.backend
        reg = int(self.engine.accumulator)
        result = CrcValue(params.width, backend.store(reg ^ params.xorout))

        self.state = PipelineState.CLOSED
        self._result = result
        self.output.add(result)
        self.output.close()
        logger.debug("%s closed after %d bytes: %r", params.name, self.bytes_in, result)


def compute(data: Any, *, cfg: CrcConfig) -> CrcValue:
    """
    One-shot CRC over a whole buffer (a single add_slice with is_last=True).
    """
    pipeline = CrcPipeline(cfg)
    pipeline.add_slice(data, 0, None, is_last=True)
    return pipeline.value


def self_check(cfg: Union[CrcConfig, CrcParams]) -> bool:
    """
    Compare the CRC of b"123456789" against params.check.
    """
    if isinstance(cfg, CrcParams):
        cfg = CrcConfig(params=cfg)
    if cfg.params.check is None:
        raise ValueError(f"{cfg.params.name}: params.check is not set")
    return compute(CHECK_INPUT, cfg=cfg) == cfg.params.check


# ----------------------------
# Internal
# ----------------------------

def _as_byte_view(chunk: Any) -> memoryview:
    if isinstance(chunk, np.ndarray):
        if chunk.dtype != np.uint8:
            raise TypeError(f"chunk array must be uint8, got {chunk.dtype}")
        if chunk.ndim != 1:
            raise ValueError(f"chunk array must be 1-D, got ndim={chunk.ndim}")
        return memoryview(np.ascontiguousarray(chunk))
    if isinstance(chunk, (bytes, bytearray)):
        return memoryview(chunk)
    if isinstance(chunk, memoryview):
        if not chunk.c_contiguous:
            return memoryview(chunk.tobytes())
        return chunk.cast("B")
    raise TypeError("chunk must be bytes-like")
