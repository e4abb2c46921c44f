from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass
class ProductCreateCommand:
    name: str
    price: Decimal
    description: str = ""
    imagen: str = ""

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        data.pop("id", None)
        return ProductCreateCommand(
            name=str(data.get("name", "")).strip(),
            price=Decimal(str(data.get("price", "0"))),
            description=str(data.get("description") or "").strip(),
            imagen=str(data.get("imagen") or "").strip(),
        )


@dataclass
class ProductUpdateCommand:
    product_id: int
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    imagen: Optional[str] = None

    @staticmethod
    def from_raw(product_id: int, payload: Dict[str, Any]):
        data = dict(payload or {})
        data.pop("id", None)
        return ProductUpdateCommand(
            product_id=product_id,
            name=str(data["name"]).strip() if "name" in data else None,
            price=Decimal(str(data["price"])) if "price" in data else None,
            description=data.get("description"),
            imagen=data.get("imagen"),
        )

    def changes(self) -> Dict[str, Any]:
        fields = {
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "imagen": self.imagen,
        }
        return {k: v for k, v in fields.items() if v is not None}
