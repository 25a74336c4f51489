import logging
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from pinsheet.utils import sentry


def test_skips_without_dsn(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    assert sentry.init_sentry() is False
    assert calls == []


def test_initialises_from_environment(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    monkeypatch.setenv("SENTRY_DSN", "https://public@example.ingest.sentry.io/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", " staging ")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.25")
    monkeypatch.setenv("PINSHEET_RELEASE", "pinsheet@0.1.0")

    assert sentry.init_sentry() is True
    assert len(calls) == 1
    options = calls[0]
    assert options["environment"] == "staging"
    assert options["traces_sample_rate"] == 0.25
    assert options["profiles_sample_rate"] == 0.0
    assert options["release"] == "pinsheet@0.1.0"


def test_bad_sample_rate_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "lots")
    with caplog.at_level(logging.WARNING):
        assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.1) == 0.1
    assert "not a valid float" in caplog.text

    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "-1")
    assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.1) == 0.1
