"""Middleware de tempo de resposta por rota"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from time import perf_counter
import logging
import uuid
from simpleval.core.config import settings

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


def route_label(request: Request) -> str:
    """Template da rota com os parâmetros, ex.: /matches/{match_id} match_id=7"""
    route = request.scope.get("route")
    template = getattr(route, "path", request.url.path)
    params = " ".join(f"{key}={value}" for key, value in request.path_params.items())
    return f"{template} {params}".strip()


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Mede cada requisição e marca as lentas no log"""

    def __init__(self, app, slow_after: float = SLOW_REQUEST_SECONDS):
        super().__init__(app)
        self.slow_after = slow_after

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start_time = perf_counter()

        response = await call_next(request)

        process_time = perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        response.headers["X-Request-ID"] = request_id
        response.headers["X-API-Version"] = settings.APP_VERSION
        response.headers["X-Content-Type-Options"] = "nosniff"

        if process_time > self.slow_after:
            logger.warning(
                f"Requisição lenta [{request_id}]: {request.method} {route_label(request)} "
                f"-> {response.status_code} em {process_time:.4f}s"
            )

        return response
