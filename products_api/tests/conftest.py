"""
Test fixtures - in-memory SQLite database + HTTP client bound to the app
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from products_api.database import Base, get_db
from products_api.main import app
from products_api.models.product import Product


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def seed_products(db_session):
    """Insert three products priced out of order"""
    products = [
        Product(name="Audífonos Inalámbricos", price=50),
        Product(name="Mouse Gamer", price=10),
        Product(name="Teclado Mecánico", price=30, availability=False),
    ]
    db_session.add_all(products)
    await db_session.commit()
    for product in products:
        await db_session.refresh(product)

    return {p.name: p for p in products}


@pytest_asyncio.fixture()
async def client(db_session):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def lenient_client(db_session):
    """Client that receives 500 responses instead of re-raised app errors"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
