"""Post index and post loading from a directory or an http(s) base URL"""

import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from folio.core.markdown import parse_post
from folio.core.models import ParsedPost, PostSummary


logger = logging.getLogger(__name__)

INDEX_FILE = 'index.json'
MD_EXTENSIONS = {'.md'}
DEFAULT_TIMEOUT = 10.0

_summaries = TypeAdapter(list[PostSummary])


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def is_remote(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


async def _read_text(source: str, name: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """Read `name` relative to source. Raises httpx.HTTPError or OSError on failure."""
    if not is_remote(source):
        return (Path(source) / name).read_text(encoding='utf-8')

    url = f"{source.rstrip('/')}/{name}"
    if client is not None:
        response = await client.get(url)
        response.raise_for_status()
        return response.text
    async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as own:
        response = await own.get(url)
        response.raise_for_status()
        return response.text


async def load_posts_index(source: str, client: Optional[httpx.AsyncClient] = None) -> list[PostSummary]:
    """Load index.json from source; logs and returns [] on any failure."""
    try:
        raw = await _read_text(source, INDEX_FILE, client)
        return _summaries.validate_python(json.loads(raw))
    except (httpx.HTTPError, OSError, ValueError) as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        logger.error("Error loading posts index from %s: %s", source, e)
        return []


async def load_post(source: str, slug: str, client: Optional[httpx.AsyncClient] = None) -> Optional[ParsedPost]:
    """Load and parse `<slug>.md` from source; logs and returns None on failure."""
    try:
        raw = await _read_text(source, f"{slug}.md", client)
    except (httpx.HTTPError, OSError, ValueError) as e:
        logger.error("Error loading post %s from %s: %s", slug, source, e)
        return None
    return parse_post(raw)


def _parse_date(value: str) -> Optional[datetime]:
    """Parse an ISO date or datetime string (a trailing Z is accepted), else None."""
    s = value.strip()
    if s.endswith('Z'):
        s = s[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(s), datetime.min.time())
        except ValueError:
            return None
    return parsed.replace(tzinfo=None)


def sort_posts(posts: list[PostSummary]) -> list[PostSummary]:
    """Return posts newest first; undated or unparseable dates sort last."""
    return sorted(posts, key=lambda p: _parse_date(p.date) or datetime.min, reverse=True)


def recent_posts(posts: list[PostSummary], limit: int = 3) -> list[PostSummary]:
    return sort_posts(posts)[:limit]


def format_date(value: str) -> str:
    """Format an ISO date as 'January 5, 2024'; unparseable input is returned as-is."""
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def discover_posts(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if it is a single .md file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def summarize_post(path: Path, parsed: ParsedPost) -> PostSummary:
    """Build the index record for a parsed post file."""
    fm = parsed.frontmatter
    return PostSummary(
        slug=fm.get('slug') or slugify(path.stem),
        title=fm.get('title', 'Untitled'),
        description=fm.get('description', ''),
        date=fm.get('date', ''),
    )
