"""
CONFIG ENGINE
Load, validate, and expose pipeline configuration

RESPONSIBILITIES:
- Load YAML configuration files
- Validate configuration integrity
- Expose read-only typed objects

RULES:
❌ No defaults if config missing
✅ Fail fast on invalid config
✅ Deterministic output
"""

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


@dataclass(frozen=True)
class AssetDataConfig:
    """Asset data pipeline tunables - Immutable"""
    news_limit: int
    rsi_period: int
    cash_yield: float
    sma20_week_window: int
    sma50_week_window: int
    sma200_week_window: int
    income_statement_limit: int

    def __post_init__(self):
        if self.news_limit < 1:
            raise ValueError("news_limit must be at least 1")
        if self.rsi_period < 2:
            raise ValueError("rsi_period must be at least 2")
        if self.income_statement_limit < 2:
            raise ValueError("income_statement_limit must be at least 2")
        windows = (self.sma20_week_window, self.sma50_week_window, self.sma200_week_window)
        if any(w < 1 for w in windows):
            raise ValueError("SMA windows must be positive")


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for non-secret pipeline configuration
    """

    def __init__(self, config_dir: Path = DEFAULT_CONFIG_DIR):
        """Initialize with config directory"""
        self.config_dir = config_dir
        self._app_config: Dict = None
        self._asset_data: AssetDataConfig = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_app_config()
        self._load_asset_data()
        self._validate_all()

    def _load_app_config(self) -> None:
        """Load application config from app.yml"""
        app_file = self.config_dir / "app.yml"
        if not app_file.exists():
            raise FileNotFoundError(f"App config not found: {app_file}")

        with open(app_file, 'r') as f:
            self._app_config = yaml.safe_load(f) or {}

    def _load_asset_data(self) -> None:
        section = self._app_config.get("asset_data")
        if not isinstance(section, dict):
            raise ValueError("app.yml is missing the 'asset_data' section")

        windows = section["crypto_sma_windows"]
        self._asset_data = AssetDataConfig(
            news_limit=int(section["news_limit"]),
            rsi_period=int(section["rsi_period"]),
            cash_yield=float(section["cash_yield"]),
            sma20_week_window=int(windows["sma20_week"]),
            sma50_week_window=int(windows["sma50_week"]),
            sma200_week_window=int(windows["sma200_week"]),
            income_statement_limit=int(section["income_statement_limit"]),
        )

    def _validate_all(self) -> None:
        """Validate all configurations"""
        llm = self._app_config.get("llm")
        if not isinstance(llm, dict) or not str(llm.get("system_message") or "").strip():
            raise ValueError("app.yml is missing 'llm.system_message'")

    # Public getters

    @property
    def asset_data(self) -> AssetDataConfig:
        """Get asset data pipeline config"""
        if self._asset_data is None:
            raise RuntimeError("Config not loaded. Call load_all() first")
        return self._asset_data

    @property
    def llm_system_message(self) -> str:
        return self.get_app_setting("llm", "system_message").strip()

    def get_app_setting(self, *keys) -> Any:
        """Get app setting by nested keys"""
        if self._app_config is None:
            raise RuntimeError("Config not loaded. Call load_all() first")

        value = self._app_config
        for key in keys:
            value = value[key]
        return value
