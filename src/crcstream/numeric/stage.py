from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Optional, Sequence
import importlib
import logging
import pkgutil


logger = logging.getLogger(__name__)

# Tried in order when Config.module is None.
_AUTO_ORDER = ("native", "bigint")


@dataclass(frozen=True)
class Config:
    """
    Numeric stage config.

    module: numeric module name ("native" or "bigint"), or None to pick
            "native" when the width fits and "bigint" otherwise
    module_cfg: instance of that module's Config (or None -> defaults)
    """
    module: Optional[str] = None
    module_cfg: Any = None


@dataclass(frozen=True)
class Backend:
    """
    A numeric module bound to one width. Resolved once, then shared by the
    table builder and the engine.
    """
    name: str
    width: int
    mod: ModuleType
    module_cfg: Any

    def store(self, value: int) -> Any:
        return self.mod.store(value, self.width, cfg=self.module_cfg)

    def make_table(self, entries: Sequence[int]) -> Any:
        return self.mod.make_table(entries, self.width, cfg=self.module_cfg)

    def as_ints(self, table: Any) -> Sequence[int]:
        return self.mod.as_ints(table)


def available_modules() -> list[str]:
    """
    Enumerate available numeric modules under crcstream.numeric.modules.
    """
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_numeric_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")
    return importlib.import_module(f"{__package__}.modules.{name}")


def _bind(name: str, width: int, module_cfg: Any) -> Optional[Backend]:
    mod = _import_numeric_module(name)

    if not hasattr(mod, "Config"):
        raise AttributeError(f"numeric module '{name}' missing Config")
    for attr in ("supports", "store", "make_table", "as_ints"):
        if not callable(getattr(mod, attr, None)):
            raise AttributeError(f"numeric module '{name}' missing {attr}")

    module_cfg = module_cfg if module_cfg is not None else mod.Config()
    if not mod.supports(width, cfg=module_cfg):
        return None
    return Backend(name=name, width=width, mod=mod, module_cfg=module_cfg)


def resolve(width: int, *, cfg: Config) -> Backend:
    """
    Pick the numeric backend for `width`.
    An explicitly requested module that cannot hold `width` is an error, not a fallback.
    """
    if cfg.module is None and cfg.module_cfg is not None:
        raise ValueError("cfg.module_cfg given without cfg.module")

    if cfg.module is not None:
        backend = _bind(cfg.module, width, cfg.module_cfg)
        if backend is None:
            raise ValueError(f"numeric module '{cfg.module}' does not support width={width}")
    else:
        backend = None
        for name in _AUTO_ORDER:
            backend = _bind(name, width, None)
            if backend is not None:
                break
        if backend is None:
            raise ValueError(f"no numeric module supports width={width}")

    logger.debug("numeric backend for width=%d: %s", width, backend.name)
    return backend
