from typing import Iterable, List, Optional

from apps.common.money import to_money

from .dtos import CartDTO, LineItemDTO
from .utils import compute_total


class LineItemMapper:
    @staticmethod
    def to_dto(line) -> LineItemDTO:
        return LineItemDTO(
            product_id=line.product_id,
            name=line.name,
            price=to_money(line.price),
            quantity=line.quantity,
            imagen=line.imagen or "",
        )

    @classmethod
    def many_to_dto(cls, lines: Iterable) -> List[LineItemDTO]:
        return [cls.to_dto(line) for line in lines]


class CartMapper:
    def __init__(self, line_mapper: Optional[LineItemMapper] = None) -> None:
        self.line_mapper = line_mapper or LineItemMapper()

    def to_dto(self, cart, lines: Iterable) -> CartDTO:
        items = self.line_mapper.many_to_dto(lines)
        return CartDTO(
            id=cart.id, user_id=cart.user_id, items=items, total=compute_total(items)
        )
