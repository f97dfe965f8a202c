# app/models.py
from pydantic import BaseModel
from typing import Optional, Dict, List, Union


class Product(BaseModel):
    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    inStock: bool


class ProductPage(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    products: List[Product]


class ProductStats(BaseModel):
    totalProducts: int
    totalInStock: int
    totalOutOfStock: int
    categories: Dict[str, int]
    # None when the store is empty
    averagePrice: Optional[float] = None
    highestPricedProduct: Optional[Product] = None
    lowestPricedProduct: Optional[Product] = None
