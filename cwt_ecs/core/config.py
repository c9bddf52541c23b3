"""Configuration for the transform engine and the scaleogram renderer.

Settings live in a TOML file with ``[transform]`` and ``[render]`` tables:

    [transform]
    max_support_ratio = 4.0
    fft_cost_factor = 3.0
    max_workers = 8

    [render]
    colormap = "viridis"
    dynamic_range_db = 80.0
    neutral_color = [0, 0, 0]

The file is found through ``CWT_ECS_CONFIG``, an explicit path, or
``cwt_ecs.toml`` in the current or home directory. Without a file the
defaults below apply.
"""

from __future__ import annotations

import logging
import os
from typing import Any, cast

from pydantic import BaseModel, Field, field_validator

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CWT_ECS_CONFIG"
CONFIG_FILENAME = "cwt_ecs.toml"


class TransformConfig(BaseModel):
    """Transform engine settings.

    Attributes:
        max_support_ratio: Largest allowed kernel length as a multiple of
            the signal length
        fft_cost_factor: Weight of the n*log2(n) FFT cost in the 'auto'
            method choice (higher favours direct correlation)
        max_workers: Worker threads per transform (None = CPU count,
            1 = serial)
    """

    max_support_ratio: float = Field(default=4.0, gt=0.0)
    fft_cost_factor: float = Field(default=3.0, gt=0.0)
    max_workers: int | None = Field(default=None, ge=1)


class RenderConfig(BaseModel):
    """Scaleogram renderer settings.

    Attributes:
        colormap: Default built-in colormap name
        colormap_entries: Number of entries sampled from a built-in colormap
        dynamic_range_db: Range kept below the maximum by 'log_compressed'
        neutral_color: Fill colour used when the matrix has no range
    """

    colormap: str = Field(default="turbo")
    colormap_entries: int = Field(default=256, ge=2, le=65536)
    dynamic_range_db: float = Field(default=60.0, gt=0.0)
    neutral_color: tuple[int, int, int] = Field(default=(128, 128, 128))

    @field_validator("neutral_color")
    @classmethod
    def _check_channels(cls, value: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(not 0 <= c <= 255 for c in value):
            raise ValueError(f"neutral_color channels must be in [0, 255], got {value}")
        return value


class CWTConfig(BaseModel):
    """Top-level configuration grouping transform and render settings."""

    transform: TransformConfig = Field(default_factory=TransformConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def _resolve_config_path(config_path: str | None) -> str | None:
    """Resolve configuration path from env, explicit path, or defaults."""
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return env_config
    if config_path:
        return config_path
    candidates = [
        CONFIG_FILENAME,
        os.path.expanduser(f"~/{CONFIG_FILENAME}"),
    ]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(config_path: str | None = None) -> CWTConfig:
    """Load configuration, falling back to defaults when no file is found.

    Args:
        config_path: Path to cwt_ecs.toml (auto-detected if None)

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If an explicit or env-provided path does not exist
        pydantic.ValidationError: If a value is out of range
    """
    resolved_path = _resolve_config_path(config_path)
    if resolved_path is None:
        logger.debug("No %s found, using default configuration", CONFIG_FILENAME)
        return CWTConfig()
    if not os.path.exists(resolved_path):
        raise FileNotFoundError(
            f"Config file not found at {resolved_path}. "
            f"Set {CONFIG_ENV_VAR} or create {CONFIG_FILENAME}"
        )
    with open(resolved_path, "rb") as f:
        raw = cast(dict[str, Any], tomllib.load(f))
    logger.debug("Loaded configuration from %s", resolved_path)
    return CWTConfig.model_validate(
        {key: raw[key] for key in ("transform", "render") if key in raw}
    )
