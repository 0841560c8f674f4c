"""Pydantic Settings configuration models.

3-tier config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., ALGO_RSI__NUM_PERIODS=21)

Per-indicator models can also be built directly and handed to each
indicator's from_config().
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SECONDS_PER_DAY = 24 * 60 * 60

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class EmaConfig(BaseModel):
    """Exponential Moving Average parameters."""

    smoothing: float = Field(default=2.0, gt=0.0)
    ema_length: int = Field(default=10, ge=1)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)

    @model_validator(mode="after")
    def validate_weight(self) -> EmaConfig:
        weight = self.smoothing / (1 + self.ema_length)
        if weight > 1.0:
            raise ValueError(
                f"smoothing / (1 + ema_length) = {weight} must not exceed 1 "
                f"(smoothing={self.smoothing}, ema_length={self.ema_length})"
            )
        return self


class SmaConfig(BaseModel):
    """Simple Moving Average parameters."""

    num_ohlc_ticks: int = Field(default=20, ge=1)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)


class MacdConfig(BaseModel):
    """MACD parameters (classic 12/26/9 on daily ticks)."""

    fast_length: int = Field(default=12, ge=1)
    slow_length: int = Field(default=26, ge=1)
    signal_smoothing: int = Field(default=9, ge=1)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)

    @model_validator(mode="after")
    def validate_lengths(self) -> MacdConfig:
        if self.fast_length >= self.slow_length:
            raise ValueError(
                f"fast_length ({self.fast_length}) must be less than "
                f"slow_length ({self.slow_length})"
            )
        return self


class RsiConfig(BaseModel):
    """Relative Strength Index parameters."""

    num_periods: int = Field(default=14, ge=1)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)


class StochasticConfig(BaseModel):
    """Stochastic Oscillator parameters."""

    num_periods: int = Field(default=14, ge=1)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)


class VolatilityConfig(BaseModel):
    """Volatility parameters. window_size=0 means all returns so far."""

    window_size: int = Field(default=0, ge=0)
    period_size_sec: int = Field(default=SECONDS_PER_DAY, ge=1)


class IndicatorSettings(BaseSettings):
    """Top-level indicator configuration.

    Env var examples:
        ALGO_LOG_LEVEL=DEBUG
        ALGO_EMA__EMA_LENGTH=50
        ALGO_VOLATILITY__WINDOW_SIZE=30
    """

    model_config = SettingsConfigDict(
        env_prefix="ALGO_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"
    ema: EmaConfig = EmaConfig()
    sma: SmaConfig = SmaConfig()
    macd: MacdConfig = MacdConfig()
    rsi: RsiConfig = RsiConfig()
    stochastic: StochasticConfig = StochasticConfig()
    volatility: VolatilityConfig = VolatilityConfig()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v
