"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "FOLIO_"


class Settings(BaseModel):
    app_name:        str   = "folio"
    posts_dir:       str   = Field(default="posts",  description="Directory of .md posts for build/render")
    output_dir:      str   = Field(default="dist",   description="Directory for rendered HTML + JSON files")
    posts_source:    str   = Field(default="posts",  description="Directory or http(s) base URL holding index.json and <slug>.md")
    github_user:     str   = Field(default="mappyx", description="GitHub account whose repositories are listed")
    github_api_url:  str   = Field(default="https://api.github.com", description="GitHub REST API base URL")
    repo_limit:      int   = Field(default=6,    ge=1, description="Max repositories listed")
    recent_limit:    int   = Field(default=3,    ge=1, description="Posts shown in the recent-posts fragment")
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    log_level:       str   = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then FOLIO_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
