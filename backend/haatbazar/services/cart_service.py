# backend/haatbazar/services/cart_service.py
"""
Servicio de Carrito de Compras para la aplicación.

Este servicio es la única fuente de verdad del pedido en curso de un
navegador. Mantiene los items en memoria y, tras cada mutación, reescribe el
carrito completo en su repositorio.

Garantías:
- Como mucho un LineItem por producto: añadir un producto existente suma
  cantidades en lugar de duplicarlo.
- `total == price * quantity` después de cada mutación.
- Toda cantidad guardada es positiva, así que el snapshot siempre se puede
  volver a cargar.
"""
import logging
from typing import List, Optional

from haatbazar.crud.cart_crud import CartRepository
from haatbazar.schemas.cart_schema import LineItem
from haatbazar.schemas.product_schema import ProductResponse, normalize_seller_id

logger = logging.getLogger(__name__)

class CartService:
    """
    Servicio para gestionar el carrito de compras de un navegador.

    No es un global: cada petición recibe su instancia a través de las
    dependencias de FastAPI, hidratada desde el repositorio.
    """

    def __init__(self, repository: CartRepository, items: Optional[List[LineItem]] = None):
        self.repository = repository
        self._items: List[LineItem] = list(items or [])

    @classmethod
    async def load(cls, repository: CartRepository) -> "CartService":
        """Crea el servicio con el snapshot guardado (vacío si no hay o está corrupto)."""
        items = await repository.load()
        return cls(repository, items)

    @property
    def items(self) -> List[LineItem]:
        """Items del carrito en orden de inserción."""
        return list(self._items)

    def _find(self, product_id: str) -> Optional[LineItem]:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    async def _persist(self):
        await self.repository.save(self._items)

    async def add_to_cart(self, product: ProductResponse, quantity: int = 1):
        """
        Añade un producto al carrito.
        Si el producto ya existe, suma la cantidad y recalcula el total.
        Las cantidades no positivas se ignoran.
        """
        if quantity <= 0:
            logger.warning(f"Carrito: cantidad no válida ({quantity}) para {product.id}, se ignora")
            return

        existing = self._find(product.id)

        if existing:
            existing.quantity += quantity
            existing.total = existing.quantity * existing.price
            logger.debug(f"Carrito: {product.id} ahora tiene {existing.quantity} unidades")
        else:
            self._items.append(LineItem(
                product_id=product.id,
                name=product.name,
                image=product.image,
                unit=product.unit,
                price=product.price_per_unit,
                quantity=quantity,
                total=quantity * product.price_per_unit,
                seller_id=normalize_seller_id(product.seller_id),
            ))
            logger.debug(f"Carrito: añadido {product.id} x{quantity}")

        await self._persist()

    async def remove_from_cart(self, product_id: str):
        """
        Elimina un producto del carrito. Si no está, no hace nada.
        """
        self._items = [item for item in self._items if item.product_id != product_id]
        await self._persist()

    async def update_quantity(self, product_id: str, quantity: int):
        """
        Sustituye la cantidad de un producto y recalcula su total.
        Las cantidades no positivas se ignoran; para quitar un producto se usa
        `remove_from_cart`.
        """
        if quantity <= 0:
            logger.warning(f"Carrito: cantidad no válida ({quantity}) para {product_id}, se ignora")
            return

        item = self._find(product_id)
        if item:
            item.quantity = quantity
            item.total = quantity * item.price
        await self._persist()

    async def clear_cart(self):
        """
        Vacía completamente el carrito.
        """
        self._items = []
        await self._persist()

    def get_cart_total(self) -> float:
        """
        Calcula el precio total de todos los productos en el carrito.
        """
        return sum((item.total for item in self._items), 0)

    def get_cart_items_count(self) -> int:
        """Número total de unidades en el carrito."""
        return sum(item.quantity for item in self._items)
