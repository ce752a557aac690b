"""Unit tests for core/markdown.py"""

import re

import pytest

from folio.core.markdown import escape_html, parse_post, split_code, to_html, wrap_paragraphs
from folio.core.models import ParsedPost


# --- fenced code ---

def test_code_block_with_language():
    """A tagged fence renders as a language-classed code element."""
    html = to_html("```js\nconst a = 1;\n```")
    assert html == '<pre><code class="language-js">const a = 1;</code></pre>'


def test_code_block_default_language():
    assert 'class="language-text"' in to_html("```\nplain\n```")


def test_code_block_content_is_protected():
    """Markdown syntax inside a fence is left literal."""
    html = to_html("```\n**bold** _it_ `tick` [a](b)\n# not a header\n* not a list\n```")
    assert "<strong>" not in html
    assert "<em>" not in html
    assert "<a " not in html
    assert "<h1>" not in html
    assert "<li>" not in html
    assert "**bold** _it_ `tick` [a](b)" in html


def test_code_block_escaped_once():
    """Code is escaped exactly once; later stages never escape it again."""
    html = to_html("```html\n<b>&amp;</b>\n```")
    assert "&lt;b&gt;&amp;amp;&lt;/b&gt;" in html
    assert "&amp;lt;" not in html


def test_multiline_code_last_line_wrapped():
    """The code flag clears on the closing line, so only that line gets a <p>."""
    html = to_html("```py\ndef f():\n    x = 1\n    return x\n```\nafter")
    assert html == (
        '<pre><code class="language-py">def f():\n'
        '    x = 1\n'
        '<p>return x</code></pre></p>\n'
        '<p>after</p>'
    )


def test_two_line_code_block_matches_dialect():
    assert to_html("```\na\nb\n```") == '<pre><code class="language-text">a\n<p>b</code></pre></p>'


def test_unterminated_fence_stays_text():
    html = to_html("```js\nconst a = 1;")
    assert "<pre>" not in html
    assert "const a = 1;" in html


def test_split_code_segments():
    segments = split_code("before\n```\nx\n```\nafter")
    assert [s.code for s in segments] == [False, True, False]
    assert segments[0].text == "before\n"
    assert segments[2].text == "\nafter"


def test_text_after_code_still_rewritten():
    html = to_html("```\nx\n```\n**bold**")
    assert html.endswith("<strong>bold</strong>")


# --- headers ---

@pytest.mark.parametrize("line,expected", [
    ("# Title", "<h1>Title</h1>"),
    ("## Title", "<h2>Title</h2>"),
    ("### Title", "<h3>Title</h3>"),
])
def test_headers(line, expected):
    assert to_html(line) == expected


def test_h3_not_taken_by_shorter_prefix():
    html = to_html("### Deep")
    assert "<h1>" not in html and "<h2>" not in html


def test_header_needs_space():
    assert to_html("#tag") == "<p>#tag</p>"


# --- inline ---

def test_emphasis():
    html = to_html("x **b** __B__ *i* _I_")
    assert html == "<p>x <strong>b</strong> <strong>B</strong> <em>i</em> <em>I</em></p>"


def test_unterminated_emphasis_is_literal():
    assert to_html("a *b") == "<p>a *b</p>"


def test_inline_code_not_escaped():
    assert to_html("use `<br>` here") == "<p>use <code><br></code> here</p>"


def test_link():
    html = to_html("[site](https://x.com)")
    assert html == '<a href="https://x.com" target="_blank">site</a>'


def test_image():
    html = to_html("![alt](img.png)")
    assert html == '<img src="img.png" alt="alt" />'


def test_link_inside_text_gets_paragraph():
    html = to_html("see [site](https://x.com) now")
    assert html == '<p>see <a href="https://x.com" target="_blank">site</a> now</p>'


# --- block constructs ---

def test_blockquotes_not_merged():
    assert to_html("> one\n> two") == "<blockquote>one</blockquote>\n<blockquote>two</blockquote>"


def test_unordered_list_wrapped_once():
    """Three bullet lines become one <ul> with three items."""
    html = to_html("* a\n* b\n* c")
    assert html.count("<ul>") == 1
    assert html.count("</ul>") == 1
    assert re.findall(r"<li>(.*?)</li>", html) == ["a", "b", "c"]
    assert "</li><li>" in html


def test_dash_bullets():
    html = to_html("- x\n- y")
    assert html == "<ul>\n<li>x</li><li>y</li>\n</ul>"


def test_only_first_list_run_wrapped():
    html = to_html("* a\n* b\n\ntext\n\n* c")
    assert html.count("<ul>") == 1
    assert html.endswith("<li>c</li>")
    assert "<p>text</p>" in html


def test_ordered_list_not_wrapped():
    html = to_html("1. one\n2. two")
    assert html == "<li>one</li><li>two</li>"
    assert "<ol>" not in html


@pytest.mark.parametrize("text", ["---", "before\n---\nafter"])
def test_horizontal_rule(text):
    assert "<hr>" in to_html(text)


def test_star_rule_collides_with_emphasis():
    """Emphasis runs before rules, so a `***` line never becomes <hr>."""
    assert to_html("***") == "<em></em>*"


# --- paragraphs ---

def test_paragraph_wrapping():
    assert to_html("Just text") == "<p>Just text</p>"


def test_empty_line_stays_empty():
    assert to_html("one\n\ntwo") == "<p>one</p>\n\n<p>two</p>"


def test_existing_tag_untouched():
    assert wrap_paragraphs("<h2>x</h2>") == "<h2>x</h2>"


def test_lines_after_list_are_wrapped():
    assert to_html("* a\nafter").endswith("</ul>\n<p>after</p>")


def test_wrap_paragraphs_inside_list_container():
    """Bare lines between <ul> and </ul> are not wrapped."""
    assert wrap_paragraphs("<ul>\nloose\n</ul>\nout") == "<ul>\nloose\n</ul>\n<p>out</p>"


def test_paragraph_text_is_stripped():
    assert to_html("   padded   ") == "<p>padded</p>"


def test_empty_input():
    assert to_html("") == ""


# --- escaping / parse entry point ---

def test_escape_html():
    assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#039;"


def test_parse_post():
    post = parse_post("---\ntitle: Hello\ndate: 2024-01-01\n---\n# Heading\nBody")
    assert isinstance(post, ParsedPost)
    assert post.frontmatter == {"title": "Hello", "date": "2024-01-01"}
    assert post.html == "<h1>Heading</h1>\n<p>Body</p>"


def test_parse_post_calls_are_independent():
    """Frontmatter from one call never leaks into the next."""
    parse_post("---\ntitle: First\n---\nx")
    assert parse_post("no frontmatter").frontmatter == {}


def test_parse_post_frontmatter_delimiter_not_hr():
    post = parse_post("---\ntitle: T\n---\nbody")
    assert "<hr>" not in post.html


def test_parse_post_full_document(sample_post):
    """Every construct of the dialect in one post, rendered in order."""
    post = parse_post(sample_post)
    assert post.frontmatter == {
        "title": "Hello, Terminal",
        "date": "2024-03-09",
        "description": "First log entry",
    }
    assert post.html == (
        "<h1>Hello</h1>\n"
        "\n"
        "<p>A paragraph with <strong>bold</strong> and <code>code</code>.</p>\n"
        "\n"
        "<h2>Steps</h2>\n"
        "\n"
        "<ul>\n"
        "<li>one</li><li>two</li>\n"
        "</ul>\n"
        "\n"
        '<pre><code class="language-python">print(&quot;hi&quot;)</code></pre>\n'
        "\n"
        "<blockquote>quoted</blockquote>\n"
        "\n"
        "<hr>\n"
        "\n"
        "<p>Footer paragraph.</p>\n"
    )
