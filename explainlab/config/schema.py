"""Pydantic models describing the composed configuration."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CensusConfig(BaseModel):
    """Where to read the census table and how to split it."""
    source: str
    label: str = "income"
    test_size: float = Field(0.2, gt=0, lt=1)
    unmapped: Literal["passthrough", "catch_all", "reject"] = "passthrough"


class SpamConfig(BaseModel):
    """Spam archive location and hashing width."""
    url: str
    member: str = "SMSSpamCollection"
    label: str = "label"
    test_size: float = Field(0.2, gt=0, lt=1)
    hash_bits: int = Field(18, ge=4, le=24)


class Resampling(BaseModel):
    """Resampling used to pick ``size``/``decay`` from the grid."""
    method: Literal["repeatedcv", "cv", "none"] = "repeatedcv"
    number: int = Field(5, ge=2)
    repeats: int = Field(1, ge=1)


class NnetConfig(BaseModel):
    """Single hidden layer network hyperparameters."""
    size: List[int] = Field(default_factory=lambda: [5])
    decay: List[float] = Field(default_factory=lambda: [0.1])
    max_iter: int = 300
    resampling: Resampling = Field(default_factory=Resampling)


class GbmConfig(BaseModel):
    """LightGBM hyperparameters for the text model."""
    n_estimators: int = 100
    learning_rate: float = 0.3
    num_leaves: int = 31
    max_depth: int = 6
    min_child_samples: int = Field(20, ge=1)


class ExplainConfig(BaseModel):
    """Per-call LIME parameters."""
    instance: int = Field(0, ge=0)
    n_features: int = Field(5, ge=1)
    n_labels: int = Field(1, ge=1)
    num_samples: int = Field(5000, ge=10)


class TrackingConfig(BaseModel):
    """MLflow tracking switch."""
    enabled: bool = False
    experiment: str = "explainlab"
    tracking_uri: Optional[str] = None


class AppConfig(BaseModel):
    """Schema for ``explainlab/config/config.yaml``."""
    seed: int = 42
    census: CensusConfig
    spam: SpamConfig
    nnet: NnetConfig = Field(default_factory=NnetConfig)
    gbm: GbmConfig = Field(default_factory=GbmConfig)
    explain: ExplainConfig = Field(default_factory=ExplainConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
