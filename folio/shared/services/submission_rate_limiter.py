"""
Submission rate limiter.

Rolling window over the epoch-ms timestamps kept in
Document.submission_history. Nothing is counted separately: the window is
recomputed from the history on every call, so a document becomes
submittable again exactly when its oldest counted submission ages out.

    limit = 3, window = 24h

    t-23h  t-10h  t-1h   now
      ●      ●     ●      ✗   → DocumentRateLimitError (retry in ~1h)
    ... one hour later, t-23h has aged out ...
             ●     ●      ✓   → history gets now appended
"""

import math

from folio.shared.core.exceptions import DocumentRateLimitError


class SubmissionRateLimiter:
    """Check and record submissions against a per-document history."""

    def __init__(self, limit: int, window_ms: int, history_max: int):
        if history_max < limit:
            raise ValueError("history_max must be >= limit")
        self.limit = limit
        self.window_ms = window_ms
        self.history_max = history_max

    def recent(self, history: list[int], now_ms: int) -> list[int]:
        """Timestamps still inside the window (strictly newer than now - window)."""
        cutoff = now_ms - self.window_ms
        return [ts for ts in history if ts > cutoff]

    def check(self, history: list[int], now_ms: int) -> None:
        """
        Raise if another submission now would exceed the limit.

        Raises:
            DocumentRateLimitError: with the seconds until the oldest counted
                submission leaves the window
        """
        recent = self.recent(history, now_ms)
        if len(recent) < self.limit:
            return

        # The window frees a slot once enough of the oldest entries age out.
        release_at = sorted(recent)[len(recent) - self.limit] + self.window_ms
        retry_after = max(1, math.ceil((release_at - now_ms) / 1000))
        raise DocumentRateLimitError(
            limit=self.limit,
            window_hours=self.window_ms // 3_600_000,
            retry_after=retry_after,
        )

    def record(self, history: list[int], now_ms: int) -> list[int]:
        """
        New history with now appended, keeping only the newest entries.

        Returns a new list so the JSON column sees an assignment.
        """
        updated = list(history) + [now_ms]
        return updated[-self.history_max:]
