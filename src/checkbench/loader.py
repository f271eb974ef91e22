"""Load test modules into a harness before running it.

A target is a path to a ``.py`` file or a dotted module name. Declarations
made at import time go to the harness being loaded; a module-level
``register(harness)`` function, when present, is called afterwards.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from checkbench.errors import TargetLoadError
from checkbench.harness import Harness, use_harness

logger = logging.getLogger("checkbench.loader")


def _module_name_for(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode()).hexdigest()[:8]
    return f"_checkbench_target_{path.stem}_{digest}"


def _import_path(path: Path) -> ModuleType:
    if not path.exists():
        raise FileNotFoundError(f"no such file: {path}")
    name = _module_name_for(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    # Sibling imports resolve from the file's directory
    sys.path.insert(0, str(path.parent))
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    finally:
        sys.path.remove(str(path.parent))
    return module


def load_target(harness: Harness, target: str) -> ModuleType:
    logger.debug(f"Loading test target '{target}'")
    with use_harness(harness):
        try:
            if target.endswith(".py"):
                module = _import_path(Path(target).resolve())
            else:
                module = importlib.import_module(target)
            register = getattr(module, "register", None)
            if callable(register):
                register(harness)
        except Exception as e:
            raise TargetLoadError(target, e) from e
    return module


def load_targets(harness: Harness, targets: list[str]) -> list[ModuleType]:
    modules = [load_target(harness, t) for t in targets]
    logger.debug(
        f"Loaded {len(modules)} target(s): {harness.registry.test_count()} function "
        f"test(s), {harness.registry.fixture_count()} fixture(s), "
        f"{len(harness.registry.benchmarks)} benchmark(s)"
    )
    return modules
