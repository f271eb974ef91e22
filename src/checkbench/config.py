from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_NAME = "checkbench.yaml"


class HarnessConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targets: list[str] = []
    isolate: bool = True
    color: bool = True
    output_dir: str = "checkbench-results"
    junit: bool = True
    html: bool = False
    default_repetitions: int = Field(default=10, ge=0)
    verbose: bool = False

    @field_validator("targets")
    @classmethod
    def targets_must_not_be_blank(cls, v: list[str]) -> list[str]:
        for target in v:
            if not target.strip():
                raise ValueError("targets must not contain blank entries")
        return v


def _expand(value: Any) -> Any:
    """Expand ``${VAR}`` / ``${VAR:-default}`` references in string values."""
    if isinstance(value, str):
        return expandvars(value)
    if isinstance(value, list):
        return [_expand(v) for v in value]
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    return value


def _resolve(base: Path, value: str) -> str:
    path = Path(value)
    if path.is_absolute():
        return value
    return str((base / path).resolve())


def _is_path_target(target: str) -> bool:
    return target.endswith(".py") or "/" in target or "\\" in target


def load_config(path: Path) -> HarnessConfig:
    """Load and validate a harness config from a YAML file."""
    if not path.exists():
        raise ValueError(f"config file not found: {path}")

    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"config file {path} must contain a mapping")

    config = HarnessConfig(**_expand(raw))

    # Resolve relative paths relative to config file location; dotted module
    # names are left to the import system
    config.targets = [
        _resolve(config_dir, t) if _is_path_target(t) else t for t in config.targets
    ]
    config.output_dir = _resolve(config_dir, config.output_dir)

    return config
