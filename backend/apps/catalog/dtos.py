from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ProductDTO:
    id: int
    name: str
    price: str
    description: str
    imagen: str
    created_at: Optional[datetime] = None
