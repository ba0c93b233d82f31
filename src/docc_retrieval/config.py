"""Configuration management with Pydantic models."""

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1",
]


class OutputFormat(str, Enum):
    """Output rendering format."""

    JSON = "json"
    TEXT = "text"


class FetcherConfig(BaseModel):
    """Configuration for HTTP fetching."""

    base_url: str = "https://developer.apple.com"
    timeout_seconds: float = Field(default=30.0, gt=0, le=120.0)
    user_agents: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS), min_length=1
    )


class GitHubConfig(BaseModel):
    """Configuration for GitHub repository resolution."""

    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    pages_suffix: str = ".github.io"
    release_limit: int = Field(default=10, ge=0, le=100)
    default_branch: str = "main"


class OutputConfig(BaseModel):
    """Configuration for output."""

    format: OutputFormat = OutputFormat.TEXT
    limit: int = Field(default=0, ge=0)  # 0 = unlimited
    path: Path | None = None


class AppConfig(BaseModel):
    """Main application configuration."""

    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    verbose: bool = False

    @classmethod
    def from_toml(cls, path: Path) -> "AppConfig":
        """Load config from a TOML file."""
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.model_validate(data)
