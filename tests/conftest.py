"""Pytest configuration and shared fixtures for the mdconvert test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by hypothesis")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a Markdown document exercising every supported construct.

    Returns
    -------
    str
        Sample document with front matter, lists, a table and footnotes.

    """
    return """---
title: Sample Document
author: Test Author
tags: [markdown, html]
---
# Sample Document

This is a **sample document** with _italic text_, ~~removed~~ words and `inline code`.

## Lists

- Item 1
- Item 2
  - Nested item

1. First item
2. Second item

- [x] Written
- [ ] Reviewed

### Code Block

```python
def hello_world():
    print("<Hello, World!>")
```

#### Table Example

| Name | Score |
|:-----|------:|
| Ann  | 10    |
| Bob  |

> A quoted line
continued lazily.

Markdown
: A lightweight markup language.

A claim that needs a source.[^src]

[^src]: The source, with a [link](https://example.com "Example").
"""
