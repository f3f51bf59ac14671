from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import importlib
import logging
import pkgutil

from crcstream.numeric.stage import Backend
from crcstream.params import CrcParams
from crcstream.table import build_table


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Engine stage config.

    module: engine module name ("normal" or "reflected"), or None to follow params.reflect
    module_cfg: instance of that module's Config (or None -> defaults)
    """
    module: Optional[str] = None
    module_cfg: Any = None


def available_modules() -> list[str]:
    """
    Enumerate available engine modules under crcstream.engine.modules.
    """
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_engine_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")
    return importlib.import_module(f"{__package__}.modules.{name}")


def _module_name_for(params: CrcParams, cfg: Config) -> str:
    if cfg.module is not None:
        return cfg.module
    if cfg.module_cfg is not None:
        raise ValueError("cfg.module_cfg given without cfg.module")
    return "reflected" if params.reflect else "normal"


def _resolve_module_and_cfg(params: CrcParams, cfg: Config):
    name = _module_name_for(params, cfg)
    mod = _import_engine_module(name)

    if not hasattr(mod, "Config"):
        raise AttributeError(f"engine module '{name}' missing Config")
    if not hasattr(mod, "Engine"):
        raise AttributeError(f"engine module '{name}' missing Engine")

    module_cfg = cfg.module_cfg if cfg.module_cfg is not None else mod.Config()
    return mod, module_cfg


def build_engine(params: CrcParams, *, cfg: Config, backend: Backend):
    """
    Build a fresh engine (own register, shared cached table) for `params`.

    The engine module is chosen here, once; its update() loop never branches
    on width or reflection.
    """
    mod, module_cfg = _resolve_module_and_cfg(params, cfg)
    table = build_table(params, backend)
    engine = mod.Engine(params, backend=backend, table=table, cfg=module_cfg)
    logger.debug("engine %s/%s for %s", mod.__name__.rsplit(".", 1)[-1], backend.name, params.name)
    return engine
