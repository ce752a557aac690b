"""Markdown dialect to HTML conversion and the post parse entry point

The dialect is deliberately small: headers, emphasis, inline code, links,
images, blockquotes, flat lists, horizontal rules, fenced code and paragraphs.
Rewrites run in a fixed order. Fenced code is cut out first and held as its own
segment, so no later rewrite ever sees code content.
"""

import re
from dataclasses import dataclass
from typing import Callable

from folio.core.frontmatter import extract_frontmatter
from folio.core.models import ParsedPost


FENCE_RE = re.compile(r'^```(\w*)\n(.*?)^```[ \t]*$', re.MULTILINE | re.DOTALL)
ESCAPE_RE = re.compile(r'[&<>"\']')
ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#039;',
}

# (pattern, replacement) pairs; order matters.
HEADERS = [
    (re.compile(r'^### (.*)$', re.MULTILINE), r'<h3>\1</h3>'),
    (re.compile(r'^## (.*)$', re.MULTILINE),  r'<h2>\1</h2>'),
    (re.compile(r'^# (.*)$', re.MULTILINE),   r'<h1>\1</h1>'),
]
EMPHASIS = [
    (re.compile(r'\*\*(.*?)\*\*'), r'<strong>\1</strong>'),
    (re.compile(r'__(.*?)__'),     r'<strong>\1</strong>'),
    (re.compile(r'\*(.*?)\*'),     r'<em>\1</em>'),
    (re.compile(r'_(.*?)_'),       r'<em>\1</em>'),
]
INLINE_CODE = [(re.compile(r'`([^`]+)`'), r'<code>\1</code>')]
LINKS = [(re.compile(r'(?<!!)\[([^\]]+)\]\(([^)]+)\)'), r'<a href="\2" target="_blank">\1</a>')]
IMAGES = [(re.compile(r'!\[([^\]]*)\]\(([^)]+)\)'), r'<img src="\2" alt="\1" />')]
BLOCKQUOTES = [(re.compile(r'^> (.*)$', re.MULTILINE), r'<blockquote>\1</blockquote>')]
BULLETS = [
    (re.compile(r'^\* (.*)$', re.MULTILINE), r'<li>\1</li>'),
    (re.compile(r'^- (.*)$', re.MULTILINE),  r'<li>\1</li>'),
]
NUMBERED = [(re.compile(r'^\d+\. (.*)$', re.MULTILINE), r'<li>\1</li>')]
RULES = [
    (re.compile(r'^---$', re.MULTILINE),     '<hr>'),
    (re.compile(r'^\*\*\*$', re.MULTILINE),  '<hr>'),
]

LIST_RUN_RE = re.compile(r'^<li>.*</li>$(?:\n<li>.*</li>$)*', re.MULTILINE)
LI_GAP_RE = re.compile(r'</li>\s*<li>')

LIST_OPEN = ('<ul>', '<ol>')
LIST_CLOSE = ('</ul>', '</ol>')


@dataclass
class Segment:
    """A slice of the body: rendered code (frozen) or text still open to rewrites."""
    text: str
    code: bool = False


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' as HTML entities."""
    return ESCAPE_RE.sub(lambda m: ESCAPES[m.group(0)], text)


def _code_block(lang: str, code: str) -> str:
    return f'<pre><code class="language-{lang or "text"}">{escape_html(code.strip())}</code></pre>'


def split_code(body: str) -> list[Segment]:
    """Split body into text and rendered fenced-code segments; unterminated fences stay text."""
    segments, last = [], 0
    for m in FENCE_RE.finditer(body):
        segments.append(Segment(body[last:m.start()]))
        segments.append(Segment(_code_block(m.group(1), m.group(2)), code=True))
        last = m.end()
    segments.append(Segment(body[last:]))
    return segments


def _rewrite(rules) -> Callable[[str], str]:
    def apply(text: str) -> str:
        for pattern, repl in rules:
            text = pattern.sub(repl, text)
        return text
    return apply


def _map_text(segments: list[Segment], fn: Callable[[str], str]) -> None:
    for seg in segments:
        if not seg.code:
            seg.text = fn(seg.text)


def _wrap_first_list(segments: list[Segment]) -> None:
    """Wrap the first contiguous run of <li> lines in the document in a <ul>."""
    for seg in segments:
        if seg.code:
            continue
        text, n = LIST_RUN_RE.subn(lambda m: f'<ul>\n{m.group(0)}\n</ul>', seg.text, count=1)
        if n:
            seg.text = text
            return


def wrap_paragraphs(html: str) -> str:
    """Wrap bare text lines in <p>, skipping lines inside <pre> blocks and list containers."""
    out = []
    in_code = in_list = False
    for line in html.split('\n'):
        stripped = line.strip()

        if stripped.startswith('<pre>'):
            in_code = True
        # closes before the wrap check: the last line of a multi-line block is wrapped
        if stripped.endswith('</pre>'):
            in_code = False
        if stripped.startswith(LIST_OPEN):
            in_list = True
        if stripped.startswith(LIST_CLOSE):
            in_list = False

        if stripped and not stripped.startswith('<') and not in_code and not in_list:
            out.append(f'<p>{stripped}</p>')
        else:
            out.append(line)
    return '\n'.join(out)


TEXT_STAGES: list[Callable[[list[Segment]], None]] = [
    lambda s: _map_text(s, _rewrite(HEADERS)),
    lambda s: _map_text(s, _rewrite(EMPHASIS)),
    lambda s: _map_text(s, _rewrite(INLINE_CODE)),
    lambda s: _map_text(s, _rewrite(LINKS)),
    lambda s: _map_text(s, _rewrite(IMAGES)),
    lambda s: _map_text(s, _rewrite(BLOCKQUOTES)),
    lambda s: _map_text(s, _rewrite(BULLETS)),
    _wrap_first_list,
    lambda s: _map_text(s, _rewrite(NUMBERED)),
    lambda s: _map_text(s, _rewrite(RULES)),
]


def to_html(body: str) -> str:
    """Convert a markdown body to an HTML fragment.

    Never raises: constructs that do not match (unterminated fences, stray
    emphasis markers) are left as literal text. Only fenced code is escaped.
    """
    segments = split_code(body)
    for stage in TEXT_STAGES:
        stage(segments)
    html = wrap_paragraphs(''.join(seg.text for seg in segments))
    return LI_GAP_RE.sub('</li><li>', html)


def parse_post(raw: str) -> ParsedPost:
    """Parse a raw post document into frontmatter and HTML."""
    frontmatter, body = extract_frontmatter(raw)
    return ParsedPost(frontmatter=frontmatter, html=to_html(body))
