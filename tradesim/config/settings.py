"""
Trade Simulator Configuration Settings
Uses pydantic-settings for environment-based configuration management.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Risk fraction bounds applied at sizing time
MIN_RISK_FRACTION = 0.001
MAX_RISK_FRACTION = 1.0


class SimulationSettings(BaseSettings):
    """Simulation session defaults."""
    model_config = SettingsConfigDict(env_prefix="SIM_")
    
    initial_equity: float = Field(default=1000.0, gt=0, description="Starting equity of a session")
    history_cap: int = Field(default=300, ge=1, description="Equity history retention window")
    
    # Starting strategy profile
    default_win_pct: float = Field(default=55.0, description="Default win probability (%)")
    default_reward_r: float = Field(default=2.0, description="Default reward multiple")
    default_loss_r: float = Field(default=1.0, description="Default loss multiple")
    
    # Risk and auto-run cadence
    default_risk_pct: float = Field(default=2.0, description="Default risk per trade (% of equity)")
    default_interval_ms: int = Field(default=250, ge=1, description="Default auto-run interval")
    
    normalization_epsilon: float = Field(default=1e-6, gt=0, description="Min span for equity normalization")
    random_seed: Optional[int] = Field(default=None, description="Seed for the random source")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""
    model_config = SettingsConfigDict(env_prefix="LOG_")
    
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log format"
    )
    json_format: bool = Field(default=False, description="Use JSON format for logs")
    
    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class ApplicationSettings(BaseSettings):
    """Main application settings aggregating all sub-settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Application info
    app_name: str = Field(default="TradeSim", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    
    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    
    # Sub-settings
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> ApplicationSettings:
    """
    Get cached application settings.
    
    Returns:
        ApplicationSettings: The application settings instance.
    """
    return ApplicationSettings()
