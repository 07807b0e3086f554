"""Tests for structured logging helpers."""

import pytest

from src.utils.logging import (
    correlation_context,
    get_structured_logger,
    log_timing,
    get_correlation_id,
    mask_name,
    mask_sensitive_data,
    sanitize_text,
)


@pytest.mark.unit
def test_correlation_context_restores_previous():
    with correlation_context("outer") as outer:
        assert outer == "outer"
        with correlation_context() as inner:
            assert inner != "outer"
            assert get_correlation_id() == inner
        assert get_correlation_id() == "outer"


@pytest.mark.unit
def test_mask_sensitive_data():
    masked = mask_sensitive_data("連絡先 hanako@example.com / 090-1234-5678")

    assert "hanako@example.com" not in masked
    assert "090-1234-5678" not in masked


@pytest.mark.unit
def test_mask_name():
    assert mask_name("山田花子") == "山***"
    assert mask_name(None) is None


@pytest.mark.unit
def test_sanitize_text_truncates():
    assert len(sanitize_text("あ" * 500, max_length=50)) <= 53
    assert sanitize_text(None) is None


@pytest.mark.unit
def test_bound_logger_adds_fields():
    log = get_structured_logger("tests.bind").bind(path="/api/matching")

    with correlation_context("corr-1"):
        fields = log._fields({"matched": 2})

    assert fields["path"] == "/api/matching"
    assert fields["correlation_id"] == "corr-1"
    assert fields["matched"] == 2
    assert "timestamp" in fields


@pytest.mark.unit
def test_log_timing_reraises():
    with pytest.raises(ValueError):
        with log_timing("failing block"):
            raise ValueError("boom")
