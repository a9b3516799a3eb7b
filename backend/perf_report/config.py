"""
Application configuration using environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = os.getenv("APP_NAME", "Performance Report Renderer")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Rendering
    # Raise on group ids missing from categoryGroups instead of rendering unlabeled
    STRICT_GROUP_LOOKUP: bool = _env_bool("STRICT_GROUP_LOOKUP", "false")
    SCORE_CALCULATOR_URL: str = os.getenv(
        "SCORE_CALCULATOR_URL", "https://googlechrome.github.io/lighthouse/scorecalc/"
    )

    # PageSpeed Insights
    PAGESPEED_API_KEY: str = os.getenv("PAGESPEED_API_KEY", "")
    PAGESPEED_TIMEOUT: int = int(os.getenv("PAGESPEED_TIMEOUT", "60"))
    PAGESPEED_STRATEGY: str = os.getenv("PAGESPEED_STRATEGY", "mobile")

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])

settings = Settings()
