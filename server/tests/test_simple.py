"""Simple test to verify pytest setup."""

from timola_api.core.rate_limiter import RateLimiter, RateLimitPolicy


def test_simple():
    """Simple test that should always pass."""
    assert 1 + 1 == 2


def test_import_app():
    """Test that we can import the app module."""
    from timola_api.main import create_app
    app = create_app()
    assert app is not None
    assert isinstance(app.state.rate_limiter, RateLimiter)


def test_injected_rate_limiter():
    """A caller-supplied limiter replaces the one built from settings."""
    from timola_api.main import create_app
    limiter = RateLimiter({"general": RateLimitPolicy(limit=1, window_seconds=1)})
    app = create_app(rate_limiter=limiter)
    assert app.state.rate_limiter is limiter
