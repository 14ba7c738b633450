# backend/haatbazar/db/redis_client.py
"""
Conexión compartida a Redis.

Redis guarda los documentos por navegador: el snapshot del carrito y el
usuario de la sesión. El cliente se crea de forma lazy en el primer uso.
"""

from typing import Optional
from redis.asyncio import Redis

from haatbazar.core.config import settings

_redis_client: Optional[Redis] = None

def get_redis_client() -> Redis:
    """Inicializa y devuelve el cliente de Redis."""
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client

async def close_redis_client():
    """Cierra la conexión al apagar la aplicación."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
