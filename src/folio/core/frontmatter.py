"""Flat key/value frontmatter extraction (no YAML semantics)"""

import re


FRONTMATTER_RE = re.compile(r'\A---\n(?:(.*?)\n)?---\n(.*)\Z', re.DOTALL)
FIELD_RE = re.compile(r'^([A-Za-z0-9_]+):\s+(\S.*)$')
QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    """Remove one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] in QUOTES and value[0] == value[-1]:
        return value[1:-1]
    return value


def parse_fields(block: str) -> dict[str, str]:
    """Parse `key: value` lines; lines of any other shape are skipped."""
    fields: dict[str, str] = {}
    for line in block.split('\n'):
        m = FIELD_RE.match(line)
        if m:
            fields[m.group(1)] = _unquote(m.group(2))
    return fields


def extract_frontmatter(raw: str) -> tuple[dict[str, str], str]:
    """Return (frontmatter, body); ({}, raw) when the document has no leading `---` block.

    Only flat `key: value` pairs are recognised. There is no escaping and no
    multi-line value; duplicate keys keep the last value.
    """
    m = FRONTMATTER_RE.match(raw)
    if not m:
        return {}, raw
    return parse_fields(m.group(1) or ''), m.group(2)
