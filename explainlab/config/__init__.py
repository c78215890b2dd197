"""Configuration loading: hydra composition validated by pydantic."""
from __future__ import annotations

from typing import Sequence

from hydra import compose, initialize_config_module
from omegaconf import OmegaConf

from .schema import AppConfig

__all__ = ["AppConfig", "load_config"]


def load_config(overrides: Sequence[str] | None = None) -> AppConfig:
    """Compose ``config.yaml`` with ``key=value`` overrides and validate it."""
    with initialize_config_module(
        config_module="explainlab.config", version_base=None
    ):
        cfg = compose(config_name="config", overrides=list(overrides or []))
    raw = OmegaConf.to_container(cfg, resolve=True)
    return AppConfig(**raw)
