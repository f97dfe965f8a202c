# sdk/product_client.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print


class ProductClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session: Optional[Any] = None,
    ):
        self.base_url = base_url.rstrip("/")
        # any requests-compatible session works (FastAPI's TestClient included)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def welcome(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Products (public)
    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        in_stock: Optional[bool] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self):
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Mutations (need api_key)
    @staticmethod
    def _payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        }

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        r = self.session.post(
            f"{self.base_url}/api/products",
            json=self._payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, description: str, price: float, category: str, in_stock: bool):
        r = self.session.put(
            f"{self.base_url}/api/products/{product_id}",
            json=self._payload(name, description, price, category, in_stock),
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example); caller inspects the status code
    async def create_product_async(
        self,
        name: str,
        description: str,
        price: float,
        category: str,
        in_stock: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.post(
                "/api/products",
                json=self._payload(name, description, price, category, in_stock),
                headers=headers,
            )
            return r


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock status")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    subparsers.add_parser("stats", help="Show catalog statistics")

    for cmd in ("create-product", "update-product"):
        sp = subparsers.add_parser(cmd)
        if cmd == "update-product":
            sp.add_argument("--product-id", required=True)
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--out-of-stock", action="store_true")

    dp = subparsers.add_parser("delete-product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        in_stock = None if args.in_stock is None else args.in_stock == "true"
        print(c.list_products(args.category, args.search, in_stock, args.page, args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "stats":
        print(c.stats())
    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, not args.out_of_stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.description, args.price, args.category,
                               not args.out_of_stock))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
