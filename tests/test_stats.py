# tests/test_stats.py
from app.database import ProductStore
from app.main import create_app
from app.config import Settings
from fastapi.testclient import TestClient


def test_stats_on_seed_data(client):
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalProducts"] == 5
    assert stats["totalInStock"] == 4
    assert stats["totalOutOfStock"] == 1
    assert stats["categories"] == {"electronics": 3, "kitchen": 1, "furniture": 1}
    assert stats["averagePrice"] == 480
    assert stats["highestPricedProduct"]["id"] == "1"
    assert stats["highestPricedProduct"]["price"] == 1200
    assert stats["lowestPricedProduct"]["id"] == "3"
    assert stats["lowestPricedProduct"]["price"] == 50


def test_stats_not_captured_as_product_id(client):
    assert "totalProducts" in client.get("/api/products/stats").json()


def test_stats_invariants_after_mutations(client, auth):
    client.post("/api/products", json={
        "name": "Mug", "description": "Ceramic mug", "price": 8, "category": "Kitchen", "inStock": False,
    }, headers=auth)
    client.delete("/api/products/1", headers=auth)
    stats = client.get("/api/products/stats").json()
    assert stats["totalInStock"] + stats["totalOutOfStock"] == stats["totalProducts"]
    assert sum(stats["categories"].values()) == stats["totalProducts"]
    # categories are counted as stored, so case matters here
    assert stats["categories"]["Kitchen"] == 1
    assert stats["lowestPricedProduct"]["price"] <= stats["averagePrice"] <= stats["highestPricedProduct"]["price"]


def test_price_ties(client, auth):
    for name in ("First", "Second"):
        client.post("/api/products", json={
            "name": name, "description": "tie", "price": 1200, "category": "x", "inStock": True,
        }, headers=auth)
    stats = client.get("/api/products/stats").json()
    # stable ascending sort: the last of the tied maximums comes out on top
    assert stats["highestPricedProduct"]["name"] == "Second"


def test_stats_on_empty_store():
    client = TestClient(create_app(store=ProductStore(), settings=Settings()))
    stats = client.get("/api/products/stats").json()
    assert stats == {
        "totalProducts": 0,
        "totalInStock": 0,
        "totalOutOfStock": 0,
        "categories": {},
        "averagePrice": None,
        "highestPricedProduct": None,
        "lowestPricedProduct": None,
    }
