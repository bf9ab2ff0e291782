"""Test configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from timola_api.core.auth import ADMIN_ROLE, issue_session_token
from timola_api.core.database import Base
from timola_api.core.dependencies import get_db
from timola_api.core.rate_limiter import RateLimiter, RateLimitPolicy
from timola_api.models import *  # noqa: F403 - Import all models


def build_rate_limiter(general: int = 1000, strict: int = 1000, window_seconds: int = 60) -> RateLimiter:
    """Rate limiter with thresholds chosen by the test."""
    return RateLimiter({
        "general": RateLimitPolicy(limit=general, window_seconds=window_seconds),
        "strict": RateLimitPolicy(limit=strict, window_seconds=window_seconds),
    })


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a test database engine over a throwaway SQLite file."""
    # File-backed: the pagination count runs on a second connection
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def rate_limiter():
    """Generous limiter so ordinary tests never hit a 429."""
    return build_rate_limiter()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session, rate_limiter):
    """Create the application wired to the test database."""
    from timola_api.main import create_app

    app = create_app(rate_limiter=rate_limiter)

    # Override database dependency
    async def override_get_db():
        try:
            yield test_session
        except Exception:
            await test_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_token():
    """Signed session token carrying the admin role."""
    return issue_session_token(user_id="admin-1", role=ADMIN_ROLE, email="admin@timolaadventures.com")


@pytest.fixture
def admin_headers(admin_token):
    """Authorization header for an admin session."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers():
    """Authorization header for a signed-in user without the admin role."""
    token = issue_session_token(user_id="user-1", role="user", email="guest@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_tour_data():
    """Wire-format payload for the seeded Toubkal trek."""
    return {
        "name": "Toubkal Ascent",
        "slug": "toubkal-ascent",
        "tagline": "Summit North Africa's highest peak",
        "description": "A two-day trek from Imlil to the 4167m summit of Jebel Toubkal.",
        "category": "Trekking",
        "duration": 2,
        "price": 185,
        "originalPrice": 220,
        "isFrom": True,
        "images": ["/images/toubkal-1.jpg"],
        "highlights": ["Summit at sunrise", "Night in the Toubkal refuge"],
        "included": ["Mountain guide", "Refuge accommodation"],
        "excluded": ["Travel insurance"],
        "itineraryGlance": ["Imlil to refuge", "Summit and descent"],
        "itineraryDetail": "## Day 1\n**Imlil** to the refuge\n- 5-6 hours walk",
        "pricingTiers": [
            {"groupSize": "2 to 3 people", "winterPrice": "200€ / Person", "summerPrice": "185€ / Person"}
        ],
        "itinerary": [
            {"day": 1, "title": "Imlil to Toubkal refuge", "description": "Walk up the valley", "stats": "1400m ascent"},
            {"day": 2, "title": "Summit and return", "description": "Early start for the summit"},
        ],
        "difficulty": "Challenging",
        "bestTime": "April to October",
        "featured": True,
    }


@pytest.fixture
def sample_trip_request_data():
    """Wire-format booking inquiry."""
    return {
        "fullName": "Amina Benali",
        "email": "amina@example.com",
        "phone": "+212 600 123 456",
        "travelDates": "2026-05-10 to 2026-05-12",
        "guests": 2,
        "message": "We would like a private guide.",
    }


@pytest.fixture
def sample_contact_data():
    """Wire-format contact form."""
    return {
        "name": "Lucas Martin",
        "email": "lucas@example.com",
        "subject": "Desert tour in December",
        "message": "Is the Merzouga tour running in December?",
    }
