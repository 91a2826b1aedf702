"""Configuration management for uaewire."""

from .loader import Config, load_config, save_config
from .models import (
    AuthConfig,
    ConfigModel,
    CurationConfig,
    DedupConfig,
    PipelineConfig,
    PostgresConfig,
    ProviderScoring,
    ProvidersConfig,
    ScoringConfig,
    Tier,
)

__all__ = [
    "AuthConfig",
    "Config",
    "ConfigModel",
    "CurationConfig",
    "DedupConfig",
    "PipelineConfig",
    "PostgresConfig",
    "ProviderScoring",
    "ProvidersConfig",
    "ScoringConfig",
    "Tier",
    "load_config",
    "save_config",
]
