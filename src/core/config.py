from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from enum import Enum

class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class ScoringPolicyType(str, Enum):
    RANDOM = "random"
    FIXED = "fixed"

class Settings(BaseSettings):
    # Basic Settings
    APP_NAME: str = "Interview Simulator"
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT
    DEBUG: bool = True
    API_PREFIX: str = "/api"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "DEBUG"

    # Question Bank
    QUESTION_SAMPLE_SIZE: int = 3

    # Session Clock
    TICK_INTERVAL_SECONDS: float = 1.0
    TIMER_ENABLED: bool = True

    # Session Outcomes
    MAX_STORED_OUTCOMES: int = 1000

    # Scoring
    SCORING_POLICY: ScoringPolicyType = ScoringPolicyType.RANDOM
    SCORE_MIN: int = 70
    SCORE_MAX: int = 100
    FIXED_SCORE: int = 85
    FALLBACK_SCORE: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra='ignore'
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()
