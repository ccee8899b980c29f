"""
Shell Configuration

Settings for the interactive shell and the download command, read from
environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class ShellConfig:
    """Configuration for a Shell instance."""

    prompt: str = "> "
    dash_args: bool = True
    case_sensitive: bool = True
    download_dir: Optional[str] = None
    download_timeout: float = 30.0
    chunk_size: int = 64 * 1024
    log_level: str = "WARNING"


def get_shell_config() -> ShellConfig:
    """Build shell config from environment variables."""
    config = ShellConfig(
        prompt=os.environ.get("IONODE_PROMPT", "> "),
        dash_args=_env_flag("IONODE_DASH_ARGS", True),
        case_sensitive=_env_flag("IONODE_CASE_SENSITIVE", True),
        download_dir=os.environ.get("IONODE_DOWNLOAD_DIR"),
        download_timeout=float(os.environ.get("IONODE_DOWNLOAD_TIMEOUT", "30.0")),
        chunk_size=int(os.environ.get("IONODE_CHUNK_SIZE", str(64 * 1024))),
        log_level=os.environ.get("IONODE_LOG_LEVEL", "WARNING").upper(),
    )
    logger.debug(f"Loaded shell config: {config}")
    return config
