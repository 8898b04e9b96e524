"""Centralised scoring settings loaded from environment / .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Factor weights
    similarity_weight: float = Field(0.35, ge=0)  # attended-event similarity
    preference_weight: float = Field(0.25, ge=0)  # category / preference overlap
    proximity_weight: float = Field(0.20, ge=0)  # geographic closeness
    popularity_weight: float = Field(0.20, ge=0)  # same constant as proximity

    # Proximity decay: e^(-distance / proximity_decay_km)
    proximity_decay_km: float = Field(100.0, gt=0)

    # Ranking
    default_limit: int = Field(5, ge=0)

    model_config = {"env_file": ".env", "env_prefix": "EVENTREC_", "extra": "ignore"}


settings = Settings()
