"""Sistema de cache Redis async"""
import hashlib
import json
from typing import Optional, Any
import logging
from redis.asyncio import Redis, ConnectionPool
from simpleval.core.config import settings

logger = logging.getLogger(__name__)


def make_key(prefix: str, raw: str) -> str:
    """Chave estável entre processos (hash() do Python é aleatório por processo)"""
    digest = hashlib.sha256(raw.encode("utf-8")).hexdigest()[:32]
    return f"{prefix}:{digest}"


class CacheManager:
    """Gerenciador de cache Redis async"""

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = None

    async def _get_client(self) -> Optional[Redis]:
        """Obtém cliente Redis (lazy initialization)"""
        if not self.enabled:
            return None
        if self._client:
            return self._client

        try:
            self._pool = ConnectionPool(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                password=settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
                health_check_interval=30,
                max_connections=20,
            )
            client = Redis(connection_pool=self._pool)
            await client.ping()
            self._client = client
            logger.info("Redis conectado com sucesso")
            return self._client
        except Exception as e:
            logger.error(f"Erro ao conectar Redis: {e}")
            return None

    async def get(self, key: str) -> Optional[Any]:
        """Obtém valor do cache"""
        client = await self._get_client()
        if not client:
            return None

        try:
            value = await client.get(key)
            return json.loads(value) if value else None
        except Exception as e:
            logger.warning(f"Erro ao ler cache {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Define valor no cache com TTL"""
        client = await self._get_client()
        if not client:
            return False

        try:
            ttl = ttl or settings.CACHE_TTL
            serialized = json.dumps(value, default=str)
            return bool(await client.setex(key, ttl, serialized))
        except Exception as e:
            logger.warning(f"Erro ao escrever cache {key}: {e}")
            return False

    async def close(self):
        """Fecha conexões Redis"""
        if self._client:
            await self._client.close()
        if self._pool:
            await self._pool.disconnect()


# Instância global do cache
cache = CacheManager()
