#!/usr/bin/env python3
"""Setup script for the Timola Tours API."""

import asyncio
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

import structlog
from alembic import command
from alembic.config import Config

from timola_api.core.auth import ADMIN_ROLE, issue_session_token
from timola_api.core.config import settings
from timola_api.core.database import async_session_factory, close_db
from timola_api.core.observability import setup_structured_logging
from timola_api.schemas.tour import CreateTourRequest, UpdateTourRequest
from timola_api.services.tour_service import TourService

setup_structured_logging()
logger = structlog.get_logger("timola_api.setup")

TOUBKAL_ASCENT = {
    "slug": "toubkal-ascent",
    "name": "Toubkal Ascent",
    "tagline": "North Africa's Highest Peak",
    "duration": 2,
    "category": "Mountain Trek",
    "price": 270,
    "originalPrice": 295,
    "isFrom": True,
    "description": (
        "Mount Toubkal, standing at 4,167 meters, is the highest peak in North Africa and one of "
        "Morocco's most iconic trekking destinations. Located in the High Atlas Mountains and starting "
        "from Marrakech, this two-day trek is perfect for travelers with good fitness who want to reach "
        "the summit in a short time while enjoying spectacular mountain scenery and Berber culture.\n\n"
        "The trek lasts two days and one night, with accommodation in a mountain refuge. The difficulty "
        "level is moderate to challenging, and the best period to climb is from April to October. During "
        "winter months, special equipment such as crampons and an ice axe is required."
    ),
    "images": [
        "https://images.unsplash.com/photo-1598555815779-1d428135272a?auto=format&fit=crop&q=80",
        "https://images.unsplash.com/photo-1539650116455-251d23630742?auto=format&fit=crop&q=80",
        "https://images.unsplash.com/photo-1549480336-6db8e99e2f49?auto=format&fit=crop&q=80",
    ],
    "highlights": [
        "Summit Mount Toubkal (4,167m)",
        "Explore High Atlas Mountains",
        "Traditional Berber Villages",
        "Stunning Panoramic Views",
    ],
    "included": [
        "Private transport Marrakech ⇄ Imlil",
        "Certified local mountain guide",
        "Mule and muleteer for luggage",
        "Accommodation in mountain refuge (1 night)",
        "Meals during the trek (lunch, dinner, breakfast)",
        "Mineral water during trekking",
    ],
    "excluded": [
        "Sleeping bag (can be rented)",
        "Personal trekking equipment",
        "Soft drinks",
        "Tips and personal expenses",
        "Travel insurance",
    ],
    "optional": [],
    "itineraryGlance": [
        "Day 1: Marrakech – Imlil – Toubkal Refuge",
        "Day 2: Toubkal Summit – Imlil – Marrakech",
    ],
    "itineraryDetail": "Full itinerary below...",
    "pricingTiers": [
        {"groupSize": "1 person", "winterPrice": "295€", "summerPrice": "270€"},
        {"groupSize": "2 to 3 people", "winterPrice": "200€ / Person", "summerPrice": "185€ / Person"},
        {"groupSize": "4 to 7 people", "winterPrice": "185€ / Person", "summerPrice": "165€ / Person"},
        {"groupSize": "8 to 14 people", "winterPrice": "150€ / Person", "summerPrice": "130€ / Person"},
    ],
    "itinerary": [
        {
            "day": 1,
            "title": "Marrakech – Imlil – Toubkal Refuge",
            "description": (
                "In the morning, you are picked up from your accommodation in Marrakech and driven through "
                "the High Atlas Mountains to the village of Imlil, a journey of around one and a half to two "
                "hours. Upon arrival in Imlil at 1,740 meters, you meet your local certified mountain guide "
                "and begin the trek.\n\nThe walk passes through the Berber village of Aroumd, following mule "
                "paths and terraced fields with beautiful views of the surrounding peaks. Around midday, you "
                "stop for lunch near the spiritual site of Sidi Chamharouch at 2,350 meters. After lunch, the "
                "trail continues steadily through the Mizane Valley until reaching the Toubkal Refuge at "
                "3,207 meters.\n\nIn the evening, dinner is served at the refuge and you spend the night "
                "there in shared accommodation."
            ),
            "stats": "5-6 hours walk, 1400m ascent",
        },
        {
            "day": 2,
            "title": "Toubkal Summit – Imlil – Marrakech",
            "description": (
                "The day starts early with breakfast around five o'clock in the morning, followed by the "
                "ascent to the summit of Mount Toubkal. The climb takes three to four hours and is done at a "
                "steady pace to ensure safety and acclimatization. From the summit at 4,167 meters, you can "
                "enjoy breathtaking panoramic views of the High Atlas Mountains and, on clear days, the "
                "distant Sahara.\n\nAfter spending time at the summit, you descend back to the refuge for "
                "lunch. In the afternoon, the trek continues downhill to Imlil, where your transport is "
                "waiting to take you back to Marrakech."
            ),
            "stats": "6-7 hours walk, 960m ascent, 2400m descent",
        },
    ],
    "whatToBring": [
        "Hiking boots (good grip)",
        "Warm clothing (layers)",
        "Waterproof jacket",
        "Backpack (20–30L)",
        "Gloves & hat (even in summer)",
        "Headlamp",
        "Sunscreen & sunglasses",
        "Sleeping bag",
    ],
    "difficulty": (
        "Moderate to challenging. No technical climbing required. Suitable for people in good physical "
        "condition. Altitude can be demanding--slow pace & hydration recommended."
    ),
    "bestTime": (
        "April to October: Best trekking season. November to March: Snow conditions – crampons & ice "
        "axe required."
    ),
}


def run_migrations():
    """Apply Alembic migrations up to head."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))
    command.upgrade(alembic_cfg, "head")


async def setup_database():
    """Setup the database with the current schema."""
    logger.info("Running database migrations")

    try:
        # env.py calls asyncio.run(); it needs a thread with no running loop
        await asyncio.to_thread(run_migrations)
    except Exception:
        logger.exception("Database migrations failed")
        raise

    logger.info("Database migrations completed")


async def seed_tours():
    """Create or refresh the Toubkal Ascent tour, keyed by slug."""
    async with async_session_factory() as db:
        service = TourService(db)
        existing = await service.get_by_slug(TOUBKAL_ASCENT["slug"], active_only=False)

        if existing:
            tour = await service.update(existing.id, UpdateTourRequest.model_validate(TOUBKAL_ASCENT))
            logger.info("Seed tour refreshed", tour_id=str(tour.id), slug=tour.slug)
        else:
            tour = await service.create(CreateTourRequest.model_validate(TOUBKAL_ASCENT))
            logger.info("Seed tour created", tour_id=str(tour.id), slug=tour.slug)


def print_dev_admin_token():
    """Print an admin session token for local development."""
    if settings.is_production:
        logger.warning("Skipping development admin token in production")
        return

    token = issue_session_token(user_id="dev-admin", role=ADMIN_ROLE, email="admin@localhost")
    print("\nDevelopment admin token (valid 12 hours):")
    print(f"  Authorization: Bearer {token}\n")


async def main():
    """Main setup function."""
    logger.info("Starting Timola Tours API setup", environment=settings.environment)

    await setup_database()
    await seed_tours()
    await close_db()

    print_dev_admin_token()

    logger.info("Setup completed successfully")
    logger.info("Start the API server with: cd server && uvicorn timola_api.main:app --reload")


if __name__ == "__main__":
    asyncio.run(main())
