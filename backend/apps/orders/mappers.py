from typing import Iterable, List, Optional

from apps.carts.mappers import LineItemMapper
from apps.common.money import to_money

from .dtos import OrderDTO


class OrderMapper:
    def __init__(self, line_mapper: Optional[LineItemMapper] = None) -> None:
        self.line_mapper = line_mapper or LineItemMapper()

    def to_dto(self, order, lines: Optional[Iterable] = None) -> OrderDTO:
        if lines is None:
            lines = order.lines.all()
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            username=order.username,
            total=to_money(order.total),
            status=order.status,
            items=self.line_mapper.many_to_dto(lines),
            created_at=getattr(order, "created_at", None),
            updated_at=getattr(order, "updated_at", None),
        )

    def many_to_dto(self, orders: Iterable) -> List[OrderDTO]:
        return [self.to_dto(o) for o in orders]
