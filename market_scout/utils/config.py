"""Configuration management for Market Scout."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class CurrencyConfig(BaseModel):
    """Display currency (a single fixed unit)."""

    code: str = "SAR"
    suffix: str = "ر.س"


class OpportunityConfig(BaseModel):
    """Opportunity rule thresholds."""

    green_min_demand: float = 60.0
    green_max_competition: float = 50.0
    price_gap_min_margin: float = 30.0
    price_gap_min_competitors: int = 2
    price_gap_threshold: float = 0.2
    price_gap_undercut: float = 0.8
    content_min_demand: float = 50.0
    content_max_rating: float = 3.5
    emerging_min_demand: float = 40.0
    emerging_max_demand: float = 70.0
    emerging_max_competition: float = 60.0
    emerging_market_units: int = 2000
    niche_max_demand: float = 40.0
    niche_min_margin: float = 35.0
    niche_max_competition: float = 40.0


class ProfitabilityConfig(BaseModel):
    """Cost model and break-even assumptions."""

    product_cost_percent: float = 0.40
    shipping_cost_percent: float = 0.05
    platform_fee_percent: float = 0.05
    monthly_fixed_costs: float = 2000.0
    fallback_price: float = 100.0
    max_monthly_units: int = 75
    min_monthly_units: int = 5
    high_sensitivity: float = 0.15
    low_sensitivity: float = 0.05


class DecisionConfig(BaseModel):
    """Decision metrics assumptions."""

    monthly_operating_costs: float = 1500.0
    inventory_months: int = 3
    marketing_share: float = 0.15
    emergency_reserve: float = 0.20


class GrowthConfig(BaseModel):
    """Growth scenario fallbacks when no profitability forecast is given."""

    fallback_price: float = 100.0
    fallback_margin: float = 25.0
    fallback_max_units: int = 50
    low_price_threshold: float = 500.0


class ReportConfig(BaseModel):
    """Report assembly configuration."""

    default_language: str = "en"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_file: bool = False  # one JSON record per line in the file sink
    rotation: str = "10 MB"
    retention: str = "30 days"


class Config(BaseModel):
    """Main configuration model."""

    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    opportunity: OpportunityConfig = Field(default_factory=OpportunityConfig)
    profitability: ProfitabilityConfig = Field(default_factory=ProfitabilityConfig)
    decision: DecisionConfig = Field(default_factory=DecisionConfig)
    growth: GrowthConfig = Field(default_factory=GrowthConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class Settings(BaseSettings):
    """Environment-based settings."""

    # Logging
    log_level: str = ""
    log_file: str = ""

    # Reports
    report_language: str = ""
    currency_code: str = ""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "MARKET_SCOUT_",
        "extra": "ignore",
    }


class ConfigManager:
    """Configuration manager for loading and merging config sources."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        load_dotenv()

        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "config.yaml"

        self.config_path = Path(config_path)
        self.yaml_config = self._load_yaml()

        self.env_settings = Settings()

        self.config = self._merge_config()

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML configuration file."""
        if not self.config_path.exists():
            return {}

        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _merge_config(self) -> Config:
        """Merge YAML config with environment variables."""
        merged = self.yaml_config.copy()

        if self.env_settings.log_level:
            merged.setdefault("logging", {})["level"] = self.env_settings.log_level

        if self.env_settings.log_file:
            merged.setdefault("logging", {})["file"] = self.env_settings.log_file

        if self.env_settings.report_language:
            merged.setdefault("report", {})[
                "default_language"
            ] = self.env_settings.report_language

        if self.env_settings.currency_code:
            merged.setdefault("currency", {})["code"] = self.env_settings.currency_code

        return Config(**merged)


# Global config instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> Config:
    """Get global configuration instance."""
    return get_config_manager().config


def get_settings() -> Settings:
    """Get environment settings."""
    return get_config_manager().env_settings


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get configuration manager instance.

    Passing ``config_path`` reloads the manager from that file.
    """
    global _config_manager
    if _config_manager is None or config_path is not None:
        _config_manager = ConfigManager(config_path)
    return _config_manager
