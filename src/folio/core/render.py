"""HTML fragments for the blog list, recent posts, single post, and projects pages"""

from typing import Optional

from folio.core.markdown import escape_html
from folio.core.models import ParsedPost, PostSummary, Repository
from folio.core.posts import format_date, recent_posts, sort_posts


SITE_NAME = "Rafael Paez"


def render_post_card(post: PostSummary) -> str:
    """One blog card linking to post.html?slug=<slug>."""
    slug = escape_html(post.slug)
    return (
        '<article class="blog-post-card">'
        f'<h3><a href="post.html?slug={slug}" style="color: inherit; text-decoration: none;">'
        f'{escape_html(post.title)}</a></h3>'
        '<div class="post-meta">'
        f'<span class="pip-badge">{escape_html(format_date(post.date))}</span>'
        '</div>'
        f'<p>{escape_html(post.description)}</p>'
        f'<a href="post.html?slug={slug}" class="pip-btn primary">Read More</a>'
        '</article>'
    )


def _cards(posts: list[PostSummary]) -> str:
    return '<div class="blog-preview">' + ''.join(render_post_card(p) for p in posts) + '</div>'


def render_post_list(posts: list[PostSummary]) -> str:
    """All posts, newest first."""
    if not posts:
        return '<p class="pip-text">No posts found.</p>'
    return _cards(sort_posts(posts))


def render_recent_posts(posts: list[PostSummary], limit: int = 3) -> str:
    """The newest `limit` posts plus a link to the full list."""
    if not posts:
        return '<p class="pip-text">No posts yet. Check back soon!</p>'
    return (
        _cards(recent_posts(posts, limit))
        + '<div style="text-align: center; margin-top: 30px;">'
        '<a href="blog.html" class="pip-btn">View All Posts</a></div>'
    )


def render_post(parsed: Optional[ParsedPost]) -> str:
    """Article panel for a parsed post. The post HTML is injected verbatim."""
    if parsed is None:
        return '<p class="pip-text error">Post not found.</p>'

    fm = parsed.frontmatter
    parts = [
        '<article class="pip-panel">',
        f'<div class="pip-panel-header">{escape_html(fm.get("title") or "Untitled")}</div>',
    ]
    if fm.get('date'):
        parts.append(
            '<div class="post-meta pip-text subtle" style="margin-bottom: 20px;">'
            f'<span class="pip-badge">{escape_html(format_date(fm["date"]))}</span></div>'
        )
    parts.append(f'<div class="markdown-content">{parsed.html}</div>')
    parts.append('</article>')
    parts.append(
        '<div style="margin-top: 30px; text-align: center;">'
        '<a href="blog.html" class="pip-btn">&larr; Back to Blog</a></div>'
    )
    return ''.join(parts)


def page_title(parsed: Optional[ParsedPost]) -> str:
    """Document title for a post page."""
    if parsed is not None and parsed.frontmatter.get('title'):
        return f"{parsed.frontmatter['title']} - {SITE_NAME}"
    return SITE_NAME


def render_repo_card(repo: Repository) -> str:
    language = f'<span class="pip-badge">{escape_html(repo.language)}</span>' if repo.language else ''
    return (
        f'<div class="project-card" data-href="{escape_html(repo.html_url)}">'
        f'<h3><a href="{escape_html(repo.html_url)}" target="_blank">{escape_html(repo.name)}</a></h3>'
        f'<p>{escape_html(repo.description or "No description available")}</p>'
        '<div class="project-meta">'
        f'{language}'
        f'<span class="pip-badge info">&#9733; {repo.stargazers_count}</span>'
        f'<span class="pip-badge">Forks: {repo.forks_count}</span>'
        '</div>'
        '</div>'
    )


def render_projects(repos: list[Repository]) -> str:
    if not repos:
        return '<p class="pip-text">No projects found.</p>'
    return '<div class="project-grid">' + ''.join(render_repo_card(r) for r in repos) + '</div>'
