# backend/haatbazar/crud/cart_crud.py
"""
Persistencia del carrito.

El carrito se guarda como un único documento JSON (una lista de LineItems)
por navegador. Siempre se lee y se escribe el documento completo: sin
versiones, sin migraciones y sin diferencias parciales.

Un snapshot ilegible nunca debe romper el carrito: un documento corrupto se
degrada a un carrito vacío, un item inválido se descarta solo, y en ambos
casos se registra un aviso.
"""
import json
import logging
from typing import Dict, List, Optional, Protocol

from pydantic import ValidationError
from redis.asyncio import Redis

from haatbazar.core.config import settings
from haatbazar.schemas.cart_schema import LineItem

logger = logging.getLogger(__name__)


class CartRepository(Protocol):
    """Interfaz que usa CartService; no conoce el mecanismo de almacenamiento."""

    async def load(self) -> List[LineItem]:
        ...

    async def save(self, items: List[LineItem]) -> None:
        ...

    async def clear(self) -> None:
        ...


def serialize_cart(items: List[LineItem]) -> str:
    """Convierte el carrito en el documento JSON persistido."""
    return json.dumps([item.model_dump(by_alias=True) for item in items])


def deserialize_cart(raw: Optional[str]) -> List[LineItem]:
    """
    Reconstruye el carrito desde el documento persistido.

    Devuelve una lista vacía si no hay documento o si no se puede interpretar.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Snapshot de carrito con JSON inválido, se usa un carrito vacío")
        return []

    if not isinstance(data, list):
        logger.warning(f"Snapshot de carrito con formato inesperado ({type(data).__name__}), se usa un carrito vacío")
        return []

    items = []
    for entry in data:
        try:
            items.append(LineItem.model_validate(entry))
        except ValidationError as e:
            # Un item ilegible no arrastra al resto del carrito
            logger.warning(f"Snapshot de carrito con un item inválido, se descarta: {e.error_count()} errores")
    return items


def remember(store: Dict[str, str], key: str, value: str, max_entries: int):
    """
    Guarda `value` en un almacén en memoria acotado.

    La clave se reinserta al final; si se supera `max_entries`, se expulsan
    las claves escritas hace más tiempo.
    """
    store.pop(key, None)
    store[key] = value
    while len(store) > max_entries:
        oldest = next(iter(store))
        store.pop(oldest)
        logger.debug(f"Almacén en memoria lleno, se expulsa {oldest}")


class RedisCartRepository:
    """Snapshot del carrito en Redis bajo la clave `cart:<browser_id>`."""

    def __init__(self, redis: Redis, browser_id: str):
        self.redis = redis
        self.key = self._get_cart_key(browser_id)

    @staticmethod
    def _get_cart_key(browser_id: str) -> str:
        """Genera la clave de Redis del carrito de un navegador."""
        return f"cart:{browser_id}"

    async def load(self) -> List[LineItem]:
        raw = await self.redis.get(self.key)
        return deserialize_cart(raw)

    async def save(self, items: List[LineItem]) -> None:
        await self.redis.set(self.key, serialize_cart(items))

    async def clear(self) -> None:
        await self.redis.delete(self.key)


# Documentos compartidos por todas las instancias en memoria, como haría Redis.
_memory_carts: Dict[str, str] = {}

class InMemoryCartRepository:
    """
    Almacenamiento en memoria del proceso, solo para desarrollo y tests.

    Guarda el documento serializado, no los objetos, para que una recarga
    pase por el mismo camino de deserialización que Redis. No caduca por
    tiempo: como mucho conserva `max_entries` navegadores y expulsa los
    escritos hace más tiempo.
    """

    def __init__(self, browser_id: str = "default", store: Optional[Dict[str, str]] = None, max_entries: Optional[int] = None):
        self.browser_id = browser_id
        self.store = _memory_carts if store is None else store
        self.max_entries = max_entries or settings.MEMORY_STORE_MAX_BROWSERS

    async def load(self) -> List[LineItem]:
        return deserialize_cart(self.store.get(self.browser_id))

    async def save(self, items: List[LineItem]) -> None:
        remember(self.store, self.browser_id, serialize_cart(items), self.max_entries)

    async def clear(self) -> None:
        self.store.pop(self.browser_id, None)
