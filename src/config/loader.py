"""
Config loader: YAML file -> JSON Schema check -> frozen dataclass tree.

API secrets resolved from environment variables (BINANCE_API_KEY, BINANCE_API_SECRET).
Config file holds only non-secret values.

Schema: docs/config/app_config.schema.json
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml

logger = logging.getLogger("orders.config")


class ConfigError(Exception):
    """Raised when the config file is missing, unparseable, or fails schema validation."""


# ---------------------------------------------------------------------------
# Project root detection (walk up from this file to find pyproject.toml)
# ---------------------------------------------------------------------------


def _find_project_root() -> Path:
    """Walk up from this file looking for pyproject.toml; fall back to CWD."""
    candidate = Path(__file__).resolve().parent
    for _ in range(10):
        if (candidate / "pyproject.toml").exists():
            return candidate
        parent = candidate.parent
        if parent == candidate:
            break
        candidate = parent
    return Path.cwd()


_PROJECT_ROOT = _find_project_root()

DEFAULT_SCHEMA_PATH = _PROJECT_ROOT / "docs" / "config" / "app_config.schema.json"


# ---------------------------------------------------------------------------
# Frozen dataclass tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VenueConfig:
    name: str = "binance-futures-testnet"
    base_url: str = "https://testnet.binancefuture.com"
    testnet: bool = True
    api_key: str = ""
    api_secret: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)


@dataclass(frozen=True)
class PricingConfig:
    reference_prices: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class SimulatorConfig:
    slippage_low: float = 0.998
    slippage_high: float = 1.002
    seed: int | None = None


@dataclass(frozen=True)
class JournalConfig:
    path: str = "data/order_log.jsonl"
    echo_stdout: bool = False


@dataclass(frozen=True)
class AlertingConfig:
    structured_logs: bool = False
    webhook_url: str = ""


@dataclass(frozen=True)
class AppConfig:
    venue: VenueConfig = VenueConfig()
    pricing: PricingConfig = PricingConfig()
    simulator: SimulatorConfig = SimulatorConfig()
    journal: JournalConfig = JournalConfig()
    alerting: AlertingConfig = AlertingConfig()


def _load_schema(schema_path: Path) -> dict[str, Any]:
    if not schema_path.exists():
        raise ConfigError(f"Config schema not found: {schema_path}")
    try:
        with open(schema_path) as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config schema is not valid JSON: {exc}") from exc


def validate_config_data(raw: dict[str, Any], schema_path: str | Path | None = None) -> None:
    """Check a parsed config mapping against the JSON Schema. Raises ConfigError."""
    schema = _load_schema(Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH)
    try:
        jsonschema.validate(instance=raw, schema=schema)
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigError(f"Config validation failed at {where}: {exc.message}") from exc


def load_config(
    path: str | Path = "config.yaml",
    schema_path: str | Path | None = None,
) -> AppConfig:
    """
    Load configuration from a YAML file.

    API keys are resolved from environment variables:
      - BINANCE_API_KEY
      - BINANCE_API_SECRET
    They are only reported on; no request is ever signed with them.

    Raises
    ------
    ConfigError
        If the file is missing, not a YAML mapping, or fails schema validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    validate_config_data(raw, schema_path)

    v_raw = raw.get("venue", {})
    venue_cfg = VenueConfig(
        name=str(v_raw.get("name", "binance-futures-testnet")),
        base_url=str(v_raw.get("base_url", "https://testnet.binancefuture.com")),
        testnet=bool(v_raw.get("testnet", True)),
        api_key=os.environ.get("BINANCE_API_KEY", ""),
        api_secret=os.environ.get("BINANCE_API_SECRET", ""),
    )

    p_raw = raw.get("pricing", {})
    pricing_cfg = PricingConfig(
        reference_prices={str(k): float(v) for k, v in (p_raw.get("reference_prices") or {}).items()},
    )

    s_raw = raw.get("simulator", {})
    seed = s_raw.get("seed")
    sim_cfg = SimulatorConfig(
        slippage_low=float(s_raw.get("slippage_low", 0.998)),
        slippage_high=float(s_raw.get("slippage_high", 1.002)),
        seed=int(seed) if seed is not None else None,
    )
    if sim_cfg.slippage_low > sim_cfg.slippage_high:
        raise ConfigError(
            f"simulator.slippage_low ({sim_cfg.slippage_low}) exceeds slippage_high ({sim_cfg.slippage_high})"
        )

    j_raw = raw.get("journal", {})
    j_cfg = JournalConfig(
        path=str(j_raw.get("path", "data/order_log.jsonl")),
        echo_stdout=bool(j_raw.get("echo_stdout", False)),
    )

    a_raw = raw.get("alerting", {})
    a_cfg = AlertingConfig(
        structured_logs=bool(a_raw.get("structured_logs", False)),
        webhook_url=str(a_raw.get("webhook_url", "")),
    )

    logger.debug("Loaded config %s (%d reference prices)", config_path, len(pricing_cfg.reference_prices))

    return AppConfig(
        venue=venue_cfg,
        pricing=pricing_cfg,
        simulator=sim_cfg,
        journal=j_cfg,
        alerting=a_cfg,
    )
