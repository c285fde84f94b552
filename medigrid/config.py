"""
Configuration management for the MediGrid symptom engine.
Uses pydantic-settings for type-safe environment variable handling.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "MediGrid Symptom Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Knowledge base
    KNOWLEDGE_BASE_PATH: Optional[str] = None

    # Scoring weights
    SYMPTOM_WEIGHT: float = Field(default=0.6, ge=0)
    REGION_WEIGHT: float = Field(default=0.15, ge=0)
    RISK_FACTOR_WEIGHT: float = Field(default=0.15, ge=0)
    PREVALENCE_WEIGHT: float = Field(default=0.10, ge=0)
    OUT_OF_REGION_FACTOR: float = Field(default=0.5, ge=0, le=1)
    SYMPTOM_CEILING_USES_WEIGHT: bool = True

    # Matching
    FUZZY_SIMILARITY_THRESHOLD: float = Field(default=0.8, ge=0, le=1)
    MATCH_THRESHOLD: float = Field(default=0.1, ge=0, le=1)
    MAX_MATCHES: int = Field(default=10, ge=1)
    TOP_MATCHES: int = Field(default=3, ge=1)

    # Confidence scoring
    CONFIDENCE_SPREAD_FACTOR: float = Field(default=0.3, ge=0)

    # Risk stratification
    URGENT_SCORE_THRESHOLD: float = Field(default=0.8, ge=0, le=1)
    SAME_DAY_SCORE_THRESHOLD: float = Field(default=0.6, ge=0, le=1)
    MODERATE_RISK_SCORE_THRESHOLD: float = Field(default=0.5, ge=0, le=1)

    # Recommendations
    DIAGNOSTIC_ITEMS_PER_MATCH: int = Field(default=3, ge=0)
    TREATMENT_ITEMS: int = Field(default=2, ge=0)
    PREVENTION_ITEMS: int = Field(default=2, ge=0)
    EMERGENCY_CONTACT_NUMBER: str = "10177"

    @model_validator(mode="after")
    def _check_match_limits(self) -> "Settings":
        if self.TOP_MATCHES > self.MAX_MATCHES:
            raise ValueError("TOP_MATCHES cannot exceed MAX_MATCHES")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
