from backend.services.rate_limit import FailedAttemptLimiter


def test_limited_after_max_failures_per_email():
    limiter = FailedAttemptLimiter()
    for _ in range(3):
        assert not limiter.is_limited("a@example.com", 3, 60)
        limiter.record_failure("a@example.com", 3, 60)
    assert limiter.is_limited("a@example.com", 3, 60)
    assert not limiter.is_limited("b@example.com", 3, 60)


def test_clear_and_reset_forget_failures():
    limiter = FailedAttemptLimiter()
    for _ in range(2):
        limiter.record_failure("a@example.com", 2, 60)
        limiter.record_failure("b@example.com", 2, 60)
    limiter.clear("a@example.com", 2, 60)
    assert not limiter.is_limited("a@example.com", 2, 60)
    assert limiter.is_limited("b@example.com", 2, 60)
    limiter.reset()
    assert not limiter.is_limited("b@example.com", 2, 60)
