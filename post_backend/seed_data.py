"""
Database seeding script for local development.

Creates two post offices, two clients and one clerk so parcels can be
created right away. Run this script after the database is reachable.
"""

import asyncio
import logging

from sqlalchemy import select

from post_backend.app.core.config import settings
from post_backend.app.core.logging import configure_logging
from post_backend.app.db.session import AsyncSessionLocal, engine, Base
from post_backend.app.models.client import Client
from post_backend.app.models.employee import Employee
from post_backend.app.models.enums import EmployeePosition
from post_backend.app.models.post_office import PostOffice
from post_backend.app.models.parcel import Parcel  # noqa: F401 (table registration)
from post_backend.app.models.parcel_log_entry import ParcelLogEntry  # noqa: F401

logger = logging.getLogger("post_backend.seed")


async def seed_data():
    """
    Seed reference data.
    
    Creates:
    - 2 post offices (Kyiv, Lviv)
    - 2 clients
    - 1 CLERK at the Kyiv office, credited on parcel handling entries
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with AsyncSessionLocal() as db:
        existing = await db.execute(select(PostOffice).limit(1))
        if existing.scalar_one_or_none():
            logger.info("Post offices already exist, skipping seeding")
            return
        
        kyiv = PostOffice(name="Kyiv Central", city="Kyiv", postcode="01001", street="Khreshchatyk 22")
        lviv = PostOffice(name="Lviv Main", city="Lviv", postcode="79000", street="Slovatskoho 1")
        db.add_all([kyiv, lviv])
        await db.flush()
        logger.info("Created post offices %s and %s", kyiv.id, lviv.id)
        
        db.add_all([
            Client(first_name="Alice", last_name="Smith", email="alice@example.com", phone="+380991234567"),
            Client(first_name="Bob", last_name="Jones", email="bob@example.com", phone="+380991234568"),
        ])
        db.add(Employee(
            first_name="Olena", last_name="Koval",
            position=settings.audit_actor_position, post_office_id=kyiv.id
        ))
        
        await db.commit()
        logger.info("Seeding completed: 2 post offices, 2 clients, 1 %s", settings.audit_actor_position.value)


async def main():
    try:
        await seed_data()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_json)
    asyncio.run(main())
