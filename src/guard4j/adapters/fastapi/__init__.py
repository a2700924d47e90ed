"""FastAPI adapter – request context middleware."""
from guard4j.adapters.fastapi.middleware import (
    FastAPIRequestContextMiddleware,
    StarletteInboundRequest,
)

__all__ = ["FastAPIRequestContextMiddleware", "StarletteInboundRequest"]
