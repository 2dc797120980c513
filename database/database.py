"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and an `init_db` helper that creates
tables and seeds a demo restaurant catalog when the catalog is empty.
"""

import os
import json
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base, Restaurant, MenuItem
from data.catalog_dataset import CATALOG_DATA

# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo this defaults to the same file but the interfaces are separated.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///dietary.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)


def _connect_args(url: str) -> dict:
    # check_same_thread is a pysqlite-only option; the parallel fetch reads from worker threads
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def seed_catalog(session) -> int:
    """Insert the demo restaurants and menu items into an empty catalog.

    Returns:
        Number of restaurants inserted (0 when the catalog already has rows).
    """
    if session.query(Restaurant).count() > 0:
        return 0
    for item in CATALOG_DATA:
        restaurant = Restaurant(
            name=item['name'],
            cuisine=item['cuisine'],
            price_range=item['price_range'],
            location=item['location'],
            rating=item['rating'],
            features=json.dumps(item.get('features', [])),
            dietary_options=json.dumps(item.get('dietary_options', [])),
            allergen_info=json.dumps(item.get('allergen_info', [])),
            health_focused=item.get('health_focused', False),
            is_active=True,
            is_approved=item.get('is_approved', True),
        )
        session.add(restaurant)
        session.flush()
        for dish in item.get('menu', []):
            session.add(MenuItem(
                restaurant_id=restaurant.id,
                name=dish['name'],
                description=dish.get('description'),
                category=dish.get('category'),
                price=dish.get('price'),
                calories=dish.get('calories'),
                spice_level=dish.get('spice_level'),
                preparation_time=dish.get('preparation_time'),
                ingredients=json.dumps(dish.get('ingredients', [])),
                allergens=json.dumps(dish.get('allergens', [])),
                dietary_tags=json.dumps(dish.get('dietary_tags', [])),
                is_available=dish.get('is_available', True),
            ))
    session.commit()
    return len(CATALOG_DATA)


def init_db():
    """Initialize database schema and seed the catalog.

    Creates all tables using SQLAlchemy models and populates the restaurant
    and menu tables with demo data if they are empty.
    """
    Base.metadata.create_all(bind=write_engine)
    session = WriteSessionLocal()
    try:
        seed_catalog(session)
    finally:
        session.close()
