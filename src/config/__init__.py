"""
Configuration loader.

App config:  reads config.yaml, validates against JSON Schema, resolves env vars for secrets.
"""

from config.loader import (
    AlertingConfig,
    AppConfig,
    ConfigError,
    JournalConfig,
    PricingConfig,
    SimulatorConfig,
    VenueConfig,
    load_config,
    validate_config_data,
)

__all__ = [
    "AlertingConfig",
    "AppConfig",
    "ConfigError",
    "JournalConfig",
    "PricingConfig",
    "SimulatorConfig",
    "VenueConfig",
    "load_config",
    "validate_config_data",
]
