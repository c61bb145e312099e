"""
Database initialization script.

    python -m app.db.init_db
"""
import logging
from app.db.session import SessionLocal, init_db
from app.services.activity_service import seed_activities

logger = logging.getLogger(__name__)


def initialize(seed: bool = True) -> int:
    """Create tables and optionally seed the activity catalog. Returns rows seeded."""
    init_db()
    if not seed:
        return 0
    db = SessionLocal()
    try:
        return seed_activities(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Initializing database...")
    seeded = initialize()
    print(f"Database initialized successfully! ({seeded} catalog activities seeded)")
