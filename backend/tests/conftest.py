import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# main refuses to import without an explicit CORS allow-list
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")


@pytest.fixture(autouse=True)
def no_sentry(monkeypatch):
    """Keep tests from ever reporting to a real Sentry project."""
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    yield
