"""Script to initialize the database."""

import asyncio

from app.config import get_settings
from app.database import create_engine_from_settings, create_tables


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    engine = create_engine_from_settings(get_settings())
    try:
        await create_tables(engine)
        print("✓ Database initialized successfully!")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_db())
