"""
Database binding tests - URL rewriting and the open/close lifecycle.
"""
import pytest
from sqlalchemy import text

from products_api.database import Database, get_async_url
from products_api.models import Product  # noqa: F401


class TestAsyncUrl:

    def test_postgresql(self):
        assert get_async_url("postgresql://u:p@db:5432/products") == "postgresql+asyncpg://u:p@db:5432/products"

    def test_postgres_shorthand(self):
        assert get_async_url("postgres://u:p@db/products") == "postgresql+asyncpg://u:p@db/products"

    def test_sqlite(self):
        assert get_async_url("sqlite:///./products.db") == "sqlite+aiosqlite:///./products.db"

    def test_already_async(self):
        url = "postgresql+asyncpg://u:p@db/products"
        assert get_async_url(url) == url


class TestDatabaseLifecycle:

    async def test_session_before_connect(self):
        database = Database("sqlite:///:memory:")
        assert not database.is_connected
        with pytest.raises(RuntimeError, match="not connected"):
            database.session()

    async def test_connect_create_tables_dispose(self, tmp_path):
        database = Database(f"sqlite:///{tmp_path / 'products.db'}")
        assert database.is_sqlite

        await database.connect()
        await database.create_tables()
        assert database.is_connected

        async with database.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM products"))
            assert result.scalar() == 0

        await database.dispose()
        assert not database.is_connected
        with pytest.raises(RuntimeError):
            database.session()

    async def test_create_tables_requires_connection(self):
        database = Database("sqlite:///:memory:")
        with pytest.raises(RuntimeError):
            await database.create_tables()

    async def test_dispose_is_idempotent(self):
        database = Database("sqlite:///:memory:")
        await database.dispose()
        assert not database.is_connected
