"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from products_api.api import products
from products_api.config import get_settings
from products_api.database import Database
from products_api.errors import register_exception_handlers
from products_api.models import Product  # noqa: F401 - registers the table on Base
from products_api.utils.logger import get_logger, quiet_third_party_loggers

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    quiet_third_party_loggers()

    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    await database.connect()
    await database.create_tables()
    app.state.db = database
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ready")

    yield

    await database.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="REST API for products: list, fetch, create, update, toggle availability and delete",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(products.router, prefix="/api/products", tags=["Products"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "products_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
