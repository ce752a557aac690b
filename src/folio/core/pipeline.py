"""Pipeline step functions: render a single post and build the static blog output"""

import json
from pathlib import Path

from folio.core.markdown import parse_post
from folio.core.models import ParsedPost, PostSummary
from folio.core.posts import INDEX_FILE, discover_posts, sort_posts, summarize_post
from folio.core.render import render_post, render_post_list, render_recent_posts


def run_render(path: Path) -> ParsedPost:
    """Read and parse a single markdown post."""
    return parse_post(path.read_text(encoding='utf-8'))


def _write_post(post_dir: Path, summary: PostSummary, parsed: ParsedPost) -> Path:
    """Write <slug>.html (article fragment) and <slug>.json (frontmatter + html)."""
    html_path = post_dir / f"{summary.slug}.html"
    html_path.write_text(render_post(parsed), encoding='utf-8')
    (post_dir / f"{summary.slug}.json").write_text(parsed.model_dump_json(indent=2), encoding='utf-8')
    return html_path


def run_build(
    posts_dir: Path,
    output_dir: Path,
    recent_limit: int = 3,
    ) -> list[tuple[str, Path]]:
    """Render every post under posts_dir into output_dir. Returns (slug, html_path) pairs.

    Layout:
      output_dir/posts/<slug>.html   article fragment
      output_dir/posts/<slug>.json   ParsedPost
      output_dir/posts/index.json    summaries, newest first
      output_dir/blog.html           post list fragment
      output_dir/recent.html         recent posts fragment
    """
    post_dir = output_dir / 'posts'
    post_dir.mkdir(parents=True, exist_ok=True)

    summaries: list[PostSummary] = []
    results = []
    for p in discover_posts(posts_dir):
        try:
            parsed = run_render(p)
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Failed to build {p}: {e}") from e
        summary = summarize_post(p, parsed)
        summaries.append(summary)
        results.append((summary.slug, _write_post(post_dir, summary, parsed)))

    ordered = sort_posts(summaries)
    (post_dir / INDEX_FILE).write_text(
        json.dumps([s.model_dump() for s in ordered], indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    (output_dir / 'blog.html').write_text(render_post_list(ordered), encoding='utf-8')
    (output_dir / 'recent.html').write_text(render_recent_posts(ordered, recent_limit), encoding='utf-8')
    return results
