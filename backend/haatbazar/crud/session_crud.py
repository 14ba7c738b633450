# backend/haatbazar/crud/session_crud.py
"""
Operaciones sobre el usuario de la sesión del navegador.

El usuario autenticado se guarda como un objeto JSON en `user:<browser_id>`.
Su presencia es la guarda de login para checkout, pago y páginas del comprador.
"""
import json
import logging
from typing import Dict, Optional, Protocol

from pydantic import ValidationError
from redis.asyncio import Redis

from haatbazar.core.config import settings
from haatbazar.crud.cart_crud import remember
from haatbazar.schemas.user_schema import SessionUser

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    async def get_user(self) -> Optional[SessionUser]:
        ...

    async def set_user(self, user: SessionUser) -> None:
        ...

    async def clear_user(self) -> None:
        ...


def _decode_user(raw: Optional[str]) -> Optional[SessionUser]:
    if not raw:
        return None
    try:
        return SessionUser.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError):
        logger.warning("Usuario de sesión ilegible, se trata como sesión cerrada")
        return None


def _encode_user(user: SessionUser) -> str:
    return json.dumps(user.model_dump(by_alias=True, exclude_none=True))


class RedisSessionRepository:

    def __init__(self, redis: Redis, browser_id: str):
        self.redis = redis
        self.key = f"user:{browser_id}"

    async def get_user(self) -> Optional[SessionUser]:
        return _decode_user(await self.redis.get(self.key))

    async def set_user(self, user: SessionUser) -> None:
        await self.redis.set(self.key, _encode_user(user))

    async def clear_user(self) -> None:
        await self.redis.delete(self.key)


_memory_sessions: Dict[str, str] = {}

class InMemorySessionRepository:
    """Sesiones en memoria del proceso (desarrollo y tests), acotadas como los carritos."""

    def __init__(self, browser_id: str = "default", store: Optional[Dict[str, str]] = None, max_entries: Optional[int] = None):
        self.browser_id = browser_id
        self.store = _memory_sessions if store is None else store
        self.max_entries = max_entries or settings.MEMORY_STORE_MAX_BROWSERS

    async def get_user(self) -> Optional[SessionUser]:
        return _decode_user(self.store.get(self.browser_id))

    async def set_user(self, user: SessionUser) -> None:
        remember(self.store, self.browser_id, _encode_user(user), self.max_entries)

    async def clear_user(self) -> None:
        self.store.pop(self.browser_id, None)
