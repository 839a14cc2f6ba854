"""
Application configuration using Pydantic Settings.
All environment variables are loaded here.

GitHub coordinates have no defaults: a missing value is a startup
misconfiguration and fails when Settings is instantiated.
"""
from functools import lru_cache

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubProperties(BaseModel):
    """Immutable GitHub repository coordinates used by the upload workflow."""

    model_config = ConfigDict(frozen=True)

    token: str
    owner: str
    repo: str
    branch: str
    api_url: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitHub repository used as image storage
    github_token: str
    github_owner: str
    github_repo: str
    github_branch: str
    github_api_url: str  # e.g., https://api.github.com
    github_timeout_seconds: float = 30.0  # Read/write timeout for GitHub calls

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def github_properties(self) -> GitHubProperties:
        """Build the frozen GitHub configuration record."""
        return GitHubProperties(
            token=self.github_token,
            owner=self.github_owner,
            repo=self.github_repo,
            branch=self.github_branch,
            api_url=self.github_api_url.rstrip("/"),
        )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
