# === FILE: pagewalk/config.py ===
"""
Loading and validation of the PageWalk configuration.
The schema is described and checked with Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)


class WalkerConfig(BaseModel):
    """Configuration for one walk over a paginated feed."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="URL of the first page.")
    timeout: float = Field(10.0, gt=0, description="Timeout for a single request (seconds).")
    user_agent: str = Field("PageWalk/1.0", min_length=1, description="User-Agent header.")
    rate_limit: float = Field(1.0, gt=0, description="Requests per second.")
    retry_times: int = Field(3, ge=0, description="Retries on 5xx/429 and network errors.")
    backoff_factor: float = Field(1.0, ge=0, description="Multiplier for the retry backoff.")
    max_items: Optional[int] = Field(None, ge=1, description="Stop after this many items.")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Extra request headers (e.g. Accept)."
    )

    @field_validator("headers")
    def _reject_user_agent_header(cls, v: Dict[str, str]) -> Dict[str, str]:
        if any(name.lower() == "user-agent" for name in v):
            raise ValueError("set the User-Agent through 'user_agent', not 'headers'")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> WalkerConfig:
    """
    Read YAML or JSON and return a validated WalkerConfig.
    Raises FileNotFoundError when the config file is missing.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return WalkerConfig(**data)


__all__ = ["WalkerConfig", "load_config"]
