import hmac
from typing import Optional

from fastapi import Header, Request

from .errors import UnauthorizedError


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    """Dependency for mutation routes: the x-api-key header must equal the configured secret."""
    expected = request.app.state.settings.api_key
    if not x_api_key or not hmac.compare_digest(x_api_key.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedError()
