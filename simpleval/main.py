"""Aplicação principal FastAPI"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from simpleval.core.config import settings
from simpleval.core.exceptions import SimplevalError, simpleval_error_handler
from simpleval.core.logging_config import setup_logging
from simpleval.core.middleware import RequestTimingMiddleware
from simpleval.api.v1.api import api_router
import logging

# Configura logging
setup_logging()
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/hour", "100/minute"]
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown"""
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciando...")

    try:
        from simpleval.core.database import init_db
        init_db()
    except Exception as e:
        logger.warning(f"Erro ao preparar banco: {e}")

    yield
    logger.info("Aplicação encerrando...")
    from simpleval.core.cache import cache
    await cache.close()
    from simpleval.core.database import close_db
    close_db()


# Cria aplicação FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API REST de times, jogadores e partidas de VALORANT",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Estado do limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(SimplevalError, simpleval_error_handler)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestTimingMiddleware)

# Inclui routers
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Endpoint raiz"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "teams": f"{settings.API_PREFIX}/teams",
            "players": f"{settings.API_PREFIX}/players",
            "matches": f"{settings.API_PREFIX}/matches",
            "match_players": f"{settings.API_PREFIX}/match_players",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "simpleval.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
