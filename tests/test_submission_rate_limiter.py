"""Tests for the rolling submission window."""

import pytest

from folio.shared.core.exceptions import DocumentRateLimitError
from folio.shared.services.submission_rate_limiter import SubmissionRateLimiter


HOUR_MS = 3_600_000
WINDOW_MS = 24 * HOUR_MS
NOW = 1_750_000_000_000


@pytest.fixture
def limiter():
    return SubmissionRateLimiter(limit=3, window_ms=WINDOW_MS, history_max=20)


def test_allows_under_limit(limiter):
    limiter.check([NOW - HOUR_MS, NOW - 2 * HOUR_MS], NOW)


def test_blocks_at_limit_with_retry_after(limiter):
    history = [NOW - 23 * HOUR_MS, NOW - 10 * HOUR_MS, NOW - HOUR_MS]

    with pytest.raises(DocumentRateLimitError) as exc_info:
        limiter.check(history, NOW)

    error = exc_info.value
    assert error.status_code == 429
    assert error.details["retry_after_seconds"] == 3600
    assert error.details["limit"] == 3
    assert error.details["window_hours"] == 24
    assert "3 times per 24 hours" in error.message


def test_entry_exactly_at_window_edge_has_aged_out(limiter):
    history = [NOW - WINDOW_MS, NOW - 10 * HOUR_MS, NOW - HOUR_MS]
    limiter.check(history, NOW)


def test_old_entries_do_not_count(limiter):
    history = [NOW - 30 * HOUR_MS, NOW - 25 * HOUR_MS, NOW - 2 * HOUR_MS]
    assert limiter.recent(history, NOW) == [NOW - 2 * HOUR_MS]
    limiter.check(history, NOW)


def test_record_appends_and_caps():
    limiter = SubmissionRateLimiter(limit=3, window_ms=WINDOW_MS, history_max=4)
    history = [1, 2, 3, 4]

    updated = limiter.record(history, 5)

    assert updated == [2, 3, 4, 5]
    assert history == [1, 2, 3, 4]


def test_history_must_hold_a_full_window():
    with pytest.raises(ValueError):
        SubmissionRateLimiter(limit=5, window_ms=WINDOW_MS, history_max=3)
