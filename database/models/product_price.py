# --- START OF FILE database/models/product_price.py ---
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ProductPrice:
    item_type: str
    product_id: str
    name: str
    price: int
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_type": self.item_type,
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductPrice":
        return cls(
            item_type=data["item_type"],
            product_id=data["product_id"],
            name=data.get("name") or data["product_id"],
            price=int(data.get("price") or 0),
            description=data.get("description") or None,
        )

# --- END OF FILE database/models/product_price.py ---
