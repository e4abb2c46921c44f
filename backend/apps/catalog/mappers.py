from typing import Iterable, List

from apps.common.money import format_money

from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=format_money(product.price),
            description=product.description or "",
            imagen=product.imagen or "",
            created_at=getattr(product, "created_at", None),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
