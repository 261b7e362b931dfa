# wardrobe/data/products.py

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Product:
    """Catalog item as served by the backend API (read-only here)"""
    id: str
    name: str
    series: str = ''
    price: float = 0
    rating: float = 0
    description: str = ''
    image_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Product':
        """
        Build a Product from a backend JSON object

        The backend keys products by ``_id``; ``id`` is accepted as well.

        Raises:
            ValueError: If the payload is not a product object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Product payload must be an object, got {type(data).__name__}")

        product_id = data.get('_id', data.get('id'))
        if product_id is None or str(product_id).strip() == '':
            raise ValueError("Product payload is missing '_id'")

        name = data.get('name')
        if not name:
            raise ValueError(f"Product {product_id} is missing 'name'")

        price = _to_number(data.get('price', 0), 'price')
        if price < 0:
            raise ValueError(f"Product {product_id} has a negative price")

        image_url = data.get('imageUrl')
        if not isinstance(image_url, str):
            image_url = None

        return cls(
            id=str(product_id),
            name=str(name),
            series=str(data.get('series') or ''),
            price=price,
            rating=_to_number(data.get('rating', 0), 'rating'),
            description=str(data.get('description') or ''),
            image_url=image_url,
        )


def _to_number(value: Any, field: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError(f"Field '{field}' must be numeric")
    if value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{field}' must be numeric, got {value!r}")
    return int(number) if number.is_integer() else number
