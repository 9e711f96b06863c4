"""
Products API endpoints
"""
from typing import Tuple

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.api.validation import body, check_request, param
from products_api.database import get_db
from products_api.errors import ProductNotFound
from products_api.models.product import Product
from products_api.repositories.product_repository import ProductRepository
from products_api.schemas.product import (
    MessageEnvelope,
    NotFoundResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
    ValidationErrorResponse,
)
from products_api.utils.logger import get_logger
from products_api.utils.validators import (
    as_boolean,
    as_number,
    as_text,
    is_boolean,
    is_int,
    is_numeric,
    is_positive,
    not_empty,
)

logger = get_logger(__name__)

router = APIRouter()

DELETED_MESSAGE = "Producto eliminado"


# --- Validation rules ---

PRICE_PLACES = Product.__table__.c.price.type.scale


def is_positive_price(value) -> bool:
    return is_positive(value, places=PRICE_PLACES)


ID_RULES = param("id", (is_int, "ID no Válido"))

NAME_RULES = body("name", (not_empty, "El nombre del Producto no puede ir vacio"))

PRICE_RULES = body(
    "price",
    (is_numeric, "Valor no válido"),
    (is_positive_price, "Precio no válido"),
    (not_empty, "El precio del Producto no puede ir vacio"),
)

AVAILABILITY_RULES = body("availability", (is_boolean, "Valor para disponibilidad no válido"))

CREATE_RULES = NAME_RULES + PRICE_RULES
UPDATE_RULES = ID_RULES + NAME_RULES + PRICE_RULES + AVAILABILITY_RULES


async def product_id_input(request: Request) -> int:
    sources = await check_request(request, ID_RULES)
    return int(sources["params"]["id"])


async def create_input(request: Request) -> ProductCreate:
    sources = await check_request(request, CREATE_RULES)
    data = sources["body"]
    return ProductCreate(name=as_text(data["name"]), price=as_number(data["price"]))


async def update_input(request: Request) -> Tuple[int, ProductUpdate]:
    sources = await check_request(request, UPDATE_RULES)
    data = sources["body"]
    return int(sources["params"]["id"]), ProductUpdate(
        name=as_text(data["name"]),
        price=as_number(data["price"]),
        availability=as_boolean(data["availability"]),
    )


# --- OpenAPI metadata for inputs read by the validation dependencies ---

ID_PARAMETER = {
    "in": "path",
    "name": "id",
    "required": True,
    "schema": {"type": "integer"},
}


def _id_docs(description: str) -> dict:
    return {"parameters": [dict(ID_PARAMETER, description=description)]}


def _body_docs(model, example: dict) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": model.model_json_schema(),
                    "example": example,
                }
            },
        }
    }


BAD_ID = {400: {"model": ValidationErrorResponse, "description": "Bad Request - Invalid ID"}}
BAD_INPUT = {400: {"model": ValidationErrorResponse, "description": "Bad Request - Invalid input data"}}
NOT_FOUND = {404: {"model": NotFoundResponse, "description": "Product Not Found"}}


# --- Helpers ---

async def _get_or_404(repository: ProductRepository, product_id: int) -> Product:
    product = await repository.get(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


def _envelope(product: Product) -> ProductEnvelope:
    return ProductEnvelope(data=ProductResponse.model_validate(product))


# --- Routes ---

@router.get("", response_model=ProductListEnvelope, include_in_schema=False)
@router.get(
    "/",
    response_model=ProductListEnvelope,
    summary="Get a list of products",
    description="Return every product, ordered by price from lowest to highest",
)
async def get_products(db: AsyncSession = Depends(get_db)):
    products = await ProductRepository(db).list_all()
    return ProductListEnvelope(data=[ProductResponse.model_validate(p) for p in products])


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    responses={**BAD_ID, **NOT_FOUND},
    openapi_extra=_id_docs("The ID of the product to retrieve"),
)
async def get_product_by_id(
    product_id: int = Depends(product_id_input),
    db: AsyncSession = Depends(get_db),
):
    product = await _get_or_404(ProductRepository(db), product_id)
    return _envelope(product)


@router.post("", response_model=ProductEnvelope, status_code=201, include_in_schema=False)
@router.post(
    "/",
    response_model=ProductEnvelope,
    status_code=201,
    summary="Creates a new product",
    description="Returns a new record in the database",
    responses=BAD_INPUT,
    openapi_extra=_body_docs(ProductCreate, {"name": "Monitor Curvo 49 Pulgadas", "price": 399}),
)
async def create_product(
    data: ProductCreate = Depends(create_input),
    db: AsyncSession = Depends(get_db),
):
    product = await ProductRepository(db).create(name=data.name, price=data.price)
    logger.info(f"Product created: ID={product.id}, name='{product.name}', price={product.price}")
    return _envelope(product)


@router.put(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Updates a product by ID",
    description="Replaces name, price and availability of an existing product",
    responses={**BAD_INPUT, **NOT_FOUND},
    openapi_extra={
        **_id_docs("The ID of the product to update"),
        **_body_docs(ProductUpdate, {"name": "Monitor Curvo 49 Pulgadas", "price": 499, "availability": True}),
    },
)
async def update_product(
    update: Tuple[int, ProductUpdate] = Depends(update_input),
    db: AsyncSession = Depends(get_db),
):
    product_id, data = update
    repository = ProductRepository(db)
    product = await _get_or_404(repository, product_id)

    product = await repository.update(product, **data.model_dump())
    logger.info(f"Product updated: ID={product.id}")
    return _envelope(product)


@router.patch(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update Product availability",
    description="Flips the availability of a product; the request body is ignored",
    responses={**BAD_ID, **NOT_FOUND},
    openapi_extra=_id_docs("The ID of the product to update"),
)
async def update_availability(
    product_id: int = Depends(product_id_input),
    db: AsyncSession = Depends(get_db),
):
    repository = ProductRepository(db)
    product = await _get_or_404(repository, product_id)

    # Read-modify-write: concurrent toggles on one row can lose an update
    product = await repository.update(product, availability=not product.availability)
    logger.info(f"Product availability toggled: ID={product.id}, availability={product.availability}")
    return _envelope(product)


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Deletes a product by a given ID",
    description="Returns a confirmation message",
    responses={**BAD_ID, **NOT_FOUND},
    openapi_extra=_id_docs("The ID of the product to delete"),
)
async def delete_product(
    product_id: int = Depends(product_id_input),
    db: AsyncSession = Depends(get_db),
):
    repository = ProductRepository(db)
    product = await _get_or_404(repository, product_id)

    await repository.delete(product)
    logger.info(f"Product deleted: ID={product_id}")
    return MessageEnvelope(data=DELETED_MESSAGE)
