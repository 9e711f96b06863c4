"""
Domain exceptions and the JSON exception handlers that turn them into responses
"""
from typing import List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from products_api.schemas.product import FieldError
from products_api.utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Producto no encontrado"
INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class ProductNotFound(Exception):
    """No product row exists for the requested id"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class ValidationFailed(Exception):
    """One or more request validation rules failed"""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.info(
        f"{request.method} {request.url.path} rejected: "
        f"{', '.join(f'{e.location}.{e.path}: {e.msg}' for e in exc.errors)}"
    )
    return JSONResponse(
        status_code=400,
        content={"errors": [e.model_dump(exclude_unset=True) for e in exc.errors]},
    )


async def product_not_found_handler(request: Request, exc: ProductNotFound) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: product {exc.product_id} not found")
    return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(ProductNotFound, product_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
