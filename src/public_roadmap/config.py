import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from public_roadmap.entities import IssueFilters

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Linear
    linear_api_key: str | None = os.getenv("LINEAR_API_KEY")
    linear_api_url: str = os.getenv("LINEAR_API_URL", "https://api.linear.app/graphql")
    linear_timeout: float = float(os.getenv("LINEAR_TIMEOUT", "30"))

    # Optional issue scope filters
    linear_team_id: str | None = os.getenv("LINEAR_TEAM_ID") or None
    linear_project_id: str | None = os.getenv("LINEAR_PROJECT_ID") or None
    linear_roadmap_label: str | None = os.getenv("LINEAR_ROADMAP_LABEL") or None

    # Cache (milliseconds)
    cache_ttl_issues: int = int(os.getenv("CACHE_TTL_ISSUES", "300000"))  # 5 minutes
    cache_ttl_comments: int = int(os.getenv("CACHE_TTL_COMMENTS", "120000"))  # 2 minutes
    cache_sweep_interval: int = int(os.getenv("CACHE_SWEEP_INTERVAL", "300000"))

    # Rate limiting
    rate_limit_max_comments: int = int(os.getenv("RATE_LIMIT_MAX_COMMENTS", "5"))
    rate_limit_window_ms: int = int(os.getenv("RATE_LIMIT_WINDOW_MS", "3600000"))  # 1 hour
    rate_limit_sweep_interval: int = int(os.getenv("RATE_LIMIT_SWEEP_INTERVAL", "600000"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        positive = {
            "CACHE_TTL_ISSUES": self.cache_ttl_issues,
            "CACHE_TTL_COMMENTS": self.cache_ttl_comments,
            "CACHE_SWEEP_INTERVAL": self.cache_sweep_interval,
            "RATE_LIMIT_MAX_COMMENTS": self.rate_limit_max_comments,
            "RATE_LIMIT_WINDOW_MS": self.rate_limit_window_ms,
            "RATE_LIMIT_SWEEP_INTERVAL": self.rate_limit_sweep_interval,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def issue_filters(self) -> IssueFilters:
        """Configured issue scope filters."""
        return IssueFilters(
            team_id=self.linear_team_id,
            project_id=self.linear_project_id,
            label_name=self.linear_roadmap_label,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
