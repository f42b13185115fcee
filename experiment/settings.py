from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from training.resampling.harness import DegeneratePolicy


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_prefix": "SSL_", "extra": "ignore"}

    # Application
    SERVICE_NAME: str = "ssl-reverse-causality"
    LOG_LEVEL: str = "INFO"

    # Data
    DATA_PATH: str = ""
    TARGET_COLUMN: str = "y"
    FEATURE_COLUMNS: str = "x1,x2,x3"  # ordered, comma separated

    # Resampling
    N_RESAMPLES: int = Field(default=1000, ge=1)
    METHOD: str = "linear"
    SEED: int = 42
    DEGENERATE_POLICY: DegeneratePolicy = DegeneratePolicy.COUNT_AS_TIE
    MAX_DEGENERATE_RETRIES: int = Field(default=10, ge=0)
    PROGRESS_EVERY: int = Field(default=100, ge=0)

    # Co-training hyperparameters
    CONFIDENCE_THRESHOLD: float = Field(default=0.1, gt=0)
    MAX_UPDATE: int = Field(default=500, ge=1)
    LABELED_SIZE_OFFSET: int = Field(default=5, ge=0)

    # Significance
    ALPHA: float = Field(default=0.05, gt=0, lt=1)

    @property
    def feature_columns(self) -> list[str]:
        return [c.strip() for c in self.FEATURE_COLUMNS.split(",") if c.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
