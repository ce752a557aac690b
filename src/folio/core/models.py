"""Value models shared by the parser, loaders, and renderers"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedPost(BaseModel):
    """Result of parsing one post: flat frontmatter plus the rendered HTML fragment."""
    frontmatter: dict[str, str] = Field(default_factory=dict)
    html: str = ""


class PostSummary(BaseModel):
    """One record of the post index (posts/index.json)."""
    model_config = ConfigDict(extra="ignore")

    slug:        str
    title:       str
    description: str = ""
    date:        str = ""           # ISO-parseable; kept as text so bad dates still list


class Repository(BaseModel):
    """Subset of a GitHub repository record used by the projects page."""
    model_config = ConfigDict(extra="ignore")

    name:             str
    html_url:         str
    description:      Optional[str] = None
    language:         Optional[str] = None
    stargazers_count: int = 0
    forks_count:      int = 0
    fork:             bool = False
