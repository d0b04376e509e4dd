"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from reviewguide.main import app
from reviewguide.services.checker import DocumentChecker

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def client() -> TestClient:
    """Return a FastAPI TestClient."""
    return TestClient(app)


@pytest.fixture
def checker() -> DocumentChecker:
    """Return a checker with default configuration and no baseline."""
    return DocumentChecker()


@pytest.fixture
def guide_path() -> Path:
    """Return the path of the guide shipped with the repository."""
    return REPO_ROOT / "GUIDE.md"


@pytest.fixture
def sample_document() -> str:
    """Return a small, valid guide-shaped document."""
    return """# Sample Guide

## Table of Contents

- [Readability](#readability)
- [Security](#security)

## Readability

### Names say what things are

```javascript
const d = getUsers(); // bad name
```

## Security

See [readability](#readability) first.
"""
