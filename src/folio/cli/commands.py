"""CLI command implementations"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer

from folio.config import Settings, load_config
from folio.core.github import fetch_repos
from folio.core.pipeline import run_build, run_render
from folio.core.posts import format_date, load_post, load_posts_index, sort_posts
from folio.core.render import page_title, render_post, render_projects


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


async def _load_index(source: str, timeout: float):
    async with httpx.AsyncClient(timeout=timeout) as client:
        return await load_posts_index(source, client)


async def _load_post(source: str, slug: str, timeout: float):
    async with httpx.AsyncClient(timeout=timeout) as client:
        return await load_post(source, slug, client)


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown post to render")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write output here instead of stdout")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit frontmatter + html as JSON")] = False,
    ):
    """Render one markdown post to an HTML fragment."""
    _settings()
    try:
        parsed = run_render(path)
    except (OSError, ValueError) as e:
        _fail(f"Cannot read {path}", e)

    text = parsed.model_dump_json(indent=2) if as_json else parsed.html
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        typer.echo(f"  {path} -> {out}")
    else:
        typer.echo(text)


def build_cmd(
    posts: Annotated[Optional[str], typer.Argument(help="Directory of markdown posts")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    recent: Annotated[Optional[int], typer.Option("--recent", help="Posts in the recent-posts fragment")] = None,
    ):
    """Render every post plus index.json, blog and recent-posts fragments."""
    settings = _settings(overrides={"posts_dir": posts, "output_dir": out, "recent_limit": recent})
    posts_dir = Path(settings.posts_dir)
    if not posts_dir.exists():
        _fail(f"Posts directory not found: {posts_dir}")

    output_dir = Path(settings.output_dir)
    try:
        results = run_build(posts_dir, output_dir, settings.recent_limit)
    except RuntimeError as e:
        _fail(str(e))
    for slug, html_path in results:
        typer.echo(f"  {slug} -> {html_path}")
    typer.echo(f"Built {len(results)} post(s) to {output_dir}/")


def posts_cmd(
    source: Annotated[Optional[str], typer.Option("--source", help="Directory or URL holding index.json")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", help="Show only the newest N posts")] = None,
    ):
    """List posts from the post index, newest first."""
    settings = _settings(overrides={"posts_source": source})
    posts = sort_posts(asyncio.run(_load_index(settings.posts_source, settings.request_timeout)))
    if limit:
        posts = posts[:limit]
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in posts:
        typer.echo(f"{format_date(p.date):<20} {p.slug}  {p.title}")


def post_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug (loads <slug>.md from the source)")],
    source: Annotated[Optional[str], typer.Option("--source", help="Directory or URL holding <slug>.md")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write the article fragment here")] = None,
    ):
    """Load one post by slug and render its article fragment."""
    settings = _settings(overrides={"posts_source": source})
    parsed = asyncio.run(_load_post(settings.posts_source, slug, settings.request_timeout))
    html = render_post(parsed)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
        typer.echo(f"  {page_title(parsed)} -> {out}")
    else:
        typer.echo(html)
    if parsed is None:
        raise typer.Exit(1)


def repos_cmd(
    user: Annotated[Optional[str], typer.Option("--user", help="GitHub username")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", help="Max repositories")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write the projects HTML fragment here")] = None,
    ):
    """List a user's public (non-fork) repositories, most starred first."""
    settings = _settings(overrides={"github_user": user, "repo_limit": limit})
    repos = asyncio.run(fetch_repos(
        settings.github_user, settings.repo_limit,
        api_url=settings.github_api_url, timeout=settings.request_timeout,
    ))
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(render_projects(repos), encoding="utf-8")
        typer.echo(f"  {len(repos)} project(s) -> {out}")
    if not repos:
        typer.echo("No projects found.")
        raise typer.Exit(1)
    for r in repos:
        typer.echo(f"{r.name}  *{r.stargazers_count}  {r.language or '-'}  {r.html_url}")
