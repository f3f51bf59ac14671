from __future__ import annotations

from typing import Any, Iterable

from crcstream.numeric.stage import Backend
from crcstream.params import CrcParams
from crcstream.table import build_lookup


class BaseEngine:
    """
    Shared state for table-driven CRC engines.

    The running register is kept as a Python int between chunks; `accumulator`
    hands it out in the backend's representation. Subclasses implement
    `initial_register` and `update`.
    """

    reflected: bool = False

    def __init__(self, params: CrcParams, *, backend: Backend, table: Any, cfg: Any = None):
        if params.reflect != self.reflected:
            raise ValueError(
                f"{type(self).__module__}: params.reflect={params.reflect} "
                f"does not match engine (reflected={self.reflected})"
            )
        self.params = params
        self.cfg = cfg
        self.width = params.width
        self.backend = backend
        self.table = table
        self._lookup = build_lookup(params, backend)
        self._reg = self.initial_register(params)

    @property
    def accumulator(self) -> Any:
        """Current register, before the final XOR."""
        return self.backend.store(self._reg)

    def initial_register(self, params: CrcParams) -> int:
        raise NotImplementedError

    def update(self, data: Iterable[int]) -> None:
        raise NotImplementedError
