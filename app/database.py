import uuid
from typing import Any, Dict, List, Optional

from .models import Product

# This file holds the in-memory product store and its seed data.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
    {
        "id": "4",
        "name": "Desk Chair",
        "description": "Ergonomic office chair with lumbar support",
        "price": 150,
        "category": "furniture",
        "inStock": True,
    },
    {
        "id": "5",
        "name": "Wireless Headphones",
        "description": "Noise-cancelling Bluetooth headphones",
        "price": 200,
        "category": "electronics",
        "inStock": True,
    },
]


class ProductStore:
    """Ordered in-memory collection of products.

    Insertion order is kept across updates; deletes compact the list.
    Nothing here awaits, so a handler's find-then-mutate sequence runs
    without interleaving on the event loop.
    """

    def __init__(self, products: Optional[List[Product]] = None):
        self._products: List[Product] = list(products or [])

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls([Product(**p) for p in SEED_PRODUCTS])

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        return list(self._products)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def new_id(self) -> str:
        pid = str(uuid.uuid4())
        while self.find_by_id(pid) is not None:
            pid = str(uuid.uuid4())
        return pid

    def insert(self, product: Product) -> Product:
        self._products.append(product)
        return product

    def replace(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        for idx, p in enumerate(self._products):
            if p.id == product_id:
                data = {k: v for k, v in fields.items() if k != "id"}
                updated = p.model_copy(update=data)
                self._products[idx] = updated
                return updated
        return None

    def remove(self, product_id: str) -> Optional[Product]:
        for idx, p in enumerate(self._products):
            if p.id == product_id:
                return self._products.pop(idx)
        return None
