"""
Product repository - the only code that reads or writes the products table.

Every mutation commits on its own; callers that read a row and then write it
(update, availability toggle) do so in two separate round-trips.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.models.product import Product

# Primary keys are INTEGER columns; anything outside this range cannot exist
MIN_ID = -(2 ** 31)
MAX_ID = 2 ** 31 - 1


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> List[Product]:
        """All products, cheapest first"""
        result = await self._session.execute(
            select(Product).order_by(Product.price.asc())
        )
        return list(result.scalars().all())

    async def get(self, product_id: int) -> Optional[Product]:
        if not MIN_ID <= product_id <= MAX_ID:
            return None
        return await self._session.get(Product, product_id)

    async def create(self, name: str, price: float) -> Product:
        product = Product(name=name, price=price, availability=True)
        self._session.add(product)
        await self._session.commit()
        await self._session.refresh(product)
        return product

    async def update(self, product: Product, **fields) -> Product:
        for key, value in fields.items():
            setattr(product, key, value)

        await self._session.commit()
        await self._session.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.commit()
