"""Configuration loading for the fetch pipelines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config/fetch_config.json")


@dataclass
class FetchConfig:
    """Settings shared by both pipelines.

    Controls where the cache lives and how the HTTP client retries.
    """

    output_root: Path = field(default_factory=lambda: Path("cached"))
    max_attempts: int = 5
    backoff_min: float = 1.0
    backoff_max: float = 30.0
    timeout_seconds: float = 30.0
    user_agent: str = "langcache/0.1 (multilingual content cache)"

    def __post_init__(self) -> None:
        """Ensure paths are Path objects and retry bounds are sane."""
        if isinstance(self.output_root, str):
            self.output_root = Path(self.output_root)
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.backoff_min < 0 or self.backoff_max < self.backoff_min:
            raise ValueError(
                f"Invalid backoff bounds: min={self.backoff_min}, max={self.backoff_max}"
            )


def load_fetch_config(config_path: Path | None = None) -> FetchConfig:
    """Load fetch configuration from JSON, falling back to defaults.

    Reads ``config/fetch_config.json`` when *config_path* is ``None``. A
    missing default file yields the defaults; a missing explicit file is an
    error. Unrecognised keys are ignored.

    Args:
        config_path: Optional explicit path to a JSON config file.

    Returns:
        FetchConfig with values from the file merged over defaults.

    Raises:
        FileNotFoundError: If an explicit *config_path* does not exist.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    data: dict = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    field_names = set(FetchConfig.__dataclass_fields__)
    kwargs = {k: v for k, v in data.items() if k in field_names}
    return FetchConfig(**kwargs)
