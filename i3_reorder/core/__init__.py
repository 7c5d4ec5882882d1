"""IPC client and configuration."""

from .config import DEFAULT_SCRATCH_MARGIN, ReorderConfig, load_config
from .i3_client import I3Client

__all__ = ["DEFAULT_SCRATCH_MARGIN", "I3Client", "ReorderConfig", "load_config"]
