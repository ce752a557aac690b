"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
title: "Hello, Terminal"
date: 2024-03-09
description: 'First log entry'
---
# Hello

A paragraph with **bold** and `code`.

## Steps

* one
* two

```python
print("hi")
```

> quoted

---

Footer paragraph.
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture() -> str:
    """A post exercising every block construct of the dialect."""
    return SAMPLE_POST
