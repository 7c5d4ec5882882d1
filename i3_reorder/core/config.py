"""Configuration for i3-reorder.

Settings are read from ~/.config/i3-reorder/config.json (or
$XDG_CONFIG_HOME/i3-reorder/config.json). A missing file means defaults.

Example config.json:
    {
        "scratch_margin": 10,
        "socket_path": "/run/user/1000/sway-ipc.sock"
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigLoadError

logger = logging.getLogger(__name__)

# Gap between the highest workspace id and the scratch id used for swaps
DEFAULT_SCRATCH_MARGIN = 10

SCRATCH_MARGIN_ENV = "I3_REORDER_SCRATCH_MARGIN"


class ReorderConfig(BaseModel):
    """Runtime settings."""

    model_config = ConfigDict(extra="forbid")

    scratch_margin: int = Field(
        DEFAULT_SCRATCH_MARGIN,
        ge=1,
        description="Offset above the highest workspace id used as swap scratch id",
    )
    socket_path: Optional[str] = Field(
        None,
        description="i3/sway IPC socket (default: discovered by i3ipc)",
    )


def default_config_path() -> Path:
    """Config file location, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "i3-reorder" / "config.json"


def load_config(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReorderConfig:
    """Load configuration from disk and environment.

    Args:
        config_file: Explicit config path (default: default_config_path())
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated ReorderConfig

    Raises:
        ConfigLoadError: If the file exists but is unreadable or invalid
    """
    if config_file is None:
        config_file = default_config_path()
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}
    if config_file.exists():
        try:
            with config_file.open("r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigLoadError(str(config_file), str(e)) from e

        if not isinstance(data, dict):
            raise ConfigLoadError(str(config_file), "top-level value must be an object")
        logger.debug(f"Loaded config from {config_file}: {data}")
    else:
        logger.debug(f"No config file at {config_file}, using defaults")

    margin = environ.get(SCRATCH_MARGIN_ENV)
    if margin:
        data["scratch_margin"] = margin

    try:
        return ReorderConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(str(config_file), str(e)) from e
