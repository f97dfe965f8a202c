"""Domain errors and the handlers that turn them into JSON responses.

Every error path answers with a JSON body carrying ``error`` plus either
``message`` or ``details``. Internal failures are logged with their
traceback and replaced by a generic body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProductApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": type(self).__name__, "message": self.message}


class NotFoundError(ProductApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ProductApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ProductApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Valid API key required in x-api-key header"):
        super().__init__(message)

    def to_response(self) -> dict:
        return {"error": "Unauthorized", "message": self.message}


def _original_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url += "?" + request.url.query
    return url


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        logger.warning(f"Rejected {request.method} {request.url.path}: missing or invalid API key")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(ProductApiError)
    async def product_api_error_handler(request: Request, exc: ProductApiError):
        logger.error(f"{type(exc).__name__}: {exc.message}", extra={"path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Malformed request on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Bad Request", "message": "Malformed JSON in request body"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # 405 included: an unsupported method on a known path is an unknown route
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Route not found",
                    "message": f"The route {_original_url(request)} does not exist",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "HTTP Error", "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "message": "Something went wrong on the server",
            },
        )
