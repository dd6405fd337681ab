"""Tests for logging helpers."""

import logging

from common.logging_utils import (
    ActionsFormatter,
    Timer,
    configure_logging,
    extra_context,
    redact,
    safe_url,
)


def make_record(level, msg, *args):
    return logging.LogRecord("test", level, __file__, 1, msg, args, None)


def test_safe_url_masks_sensitive_query_values():
    url = safe_url("https://api.test/x?access_token=abc&page=2")
    assert "abc" not in url
    assert "page=2" in url


def test_safe_url_masks_userinfo():
    assert safe_url("https://user:pw@api.test/x") == "https://[REDACTED]@api.test/x"


def test_redact_tokens():
    text = redact("Authorization: Bearer abc.def and ghp_0123456789abcdefghij")
    assert "abc.def" not in text
    assert "ghp_0123456789abcdefghij" not in text


def test_extra_context_drops_none():
    assert extra_context(event="x", target=None) == {"event": "x"}


def test_actions_formatter_annotates_warnings():
    formatter = ActionsFormatter("[%(levelname)s] %(message)s")
    assert formatter.format(make_record(logging.WARNING, "failed %s", "pkg")) == "::warning::failed pkg"
    assert formatter.format(make_record(logging.ERROR, "a\nb 100%")) == "::error::a%0Ab 100%25"
    assert formatter.format(make_record(logging.INFO, "hello")) == "[INFO] hello"


def test_configure_logging_uses_actions_formatter(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    try:
        configure_logging("warning")
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[-1].formatter, ActionsFormatter)
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0
