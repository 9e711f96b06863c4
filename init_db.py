"""Create the products table in the configured database"""
import asyncio

from products_api.config import get_settings
from products_api.database import Database
from products_api.models import Product  # noqa: F401 - registers the table on Base


async def init():
    database = Database(get_settings().DATABASE_URL)
    await database.connect()
    try:
        await database.create_tables()
    finally:
        await database.dispose()
    print("Database tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
