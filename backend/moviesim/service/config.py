"""Configuration settings for the movie similarity service."""

import os
from dataclasses import dataclass

@dataclass
class Config:
    """Main configuration class."""

    # Data paths
    CATALOG_PATH: str = "backend/data/movies.json"

    # Text normalization
    NORMALIZE_CACHE_SIZE: int = 1000

    # Ranking
    DEFAULT_ALGORITHM: str = "combined"
    DEFAULT_TOP_N: int = 6
    MAX_TOP_N: int = 50

    # Search
    DEFAULT_MAX_RESULTS: int = 10
    MIN_MATCH_CONFIDENCE: float = 0.3

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        config = cls()

        # Override with environment variables
        for field in config.__dataclass_fields__:
            env_var = f"MOVIESIM_{field}"
            if env_var in os.environ:
                value = os.environ[env_var]
                field_type = type(getattr(config, field))
                if field_type == int:
                    setattr(config, field, int(value))
                elif field_type == float:
                    setattr(config, field, float(value))
                elif field_type == bool:
                    setattr(config, field, value.lower() == "true")
                else:
                    setattr(config, field, value)

        return config

# Global config instance
config = Config.from_env()
