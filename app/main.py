# app/main.py
import logging
from typing import Any, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings, get_settings
from .database import ProductStore
from .errors import register_error_handlers
from .handlers import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, stats_logic, update_product_logic,
)
from .logging_config import setup_logging
from .models import Product, ProductPage, ProductStats
from .security import require_api_key

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to the Product API! Go to /api/products to see all products."


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, redirect_slashes=False)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        url = request.url.path
        if request.url.query:
            url += "?" + request.url.query
        logger.info(f"{request.method} request to {url}")
        # non-strict routing: /api/products/ is served as /api/products
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            request.scope["path"] = path.rstrip("/") or "/"
        return await call_next(request)

    register_error_handlers(app)

    # ---------------------------
    # Root
    # ---------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_TEXT

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", response_model=ProductPage)
    async def list_products(
        category: Optional[str] = None,
        search: Optional[str] = None,
        in_stock: Optional[str] = Query(None, alias="inStock"),
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return list_products_logic(store, category, search, in_stock, page, limit)

    # must stay ahead of /api/products/{product_id}
    @app.get("/api/products/stats", response_model=ProductStats)
    async def product_stats(store: ProductStore = Depends(get_store)):
        return stats_logic(store)

    @app.get("/api/products/{product_id}", response_model=Product)
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    # ---------------------------
    # Mutations (x-api-key required)
    # ---------------------------
    @app.post("/api/products", status_code=201, dependencies=[Depends(require_api_key)])
    async def create_product(payload: Any = Body(None), store: ProductStore = Depends(get_store)):
        return create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", dependencies=[Depends(require_api_key)])
    async def update_product(
        product_id: str,
        payload: Any = Body(None),
        store: ProductStore = Depends(get_store),
    ):
        return update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", dependencies=[Depends(require_api_key)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return delete_product_logic(store, product_id)

    return app


app = create_app()


def main() -> None:
    settings = app.state.settings
    logger.info(f"Server is running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
