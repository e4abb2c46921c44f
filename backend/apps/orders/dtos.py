from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from apps.carts.dtos import LineItemDTO


@dataclass
class OrderDTO:
    id: int
    user_id: int
    username: str
    total: Decimal
    status: str
    items: List[LineItemDTO] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
