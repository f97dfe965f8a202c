#!/usr/bin/env python
import os
from sdk.product_client import ProductClient


def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "secret-api-key-123"),
    )

    print(c.welcome())

    # -----------------------------
    # Browse the seeded catalog
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nElectronics in stock, two per page...")
    print(c.list_products(category="electronics", in_stock=True, limit=2))

    print("\nSearching for 'chair'...")
    print(c.list_products(search="chair"))

    # -----------------------------
    # Create, update, delete
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Standing Desk", "Height-adjustable desk", 450, "furniture", True)
    print(created)
    pid = created["product"]["id"]

    print("\nMarking it out of stock...")
    print(c.update_product(pid, "Standing Desk", "Height-adjustable desk", 425, "furniture", False))

    print("\nStatistics...")
    print(c.stats())

    print("\nDeleting it again...")
    print(c.delete_product(pid))


if __name__ == "__main__":
    main()
