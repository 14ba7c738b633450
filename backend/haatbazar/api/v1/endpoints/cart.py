# backend/haatbazar/api/v1/endpoints/cart.py
"""
Este archivo contiene los endpoints para el carrito de compras.

Se encarga de gestionar las operaciones de agregar productos, cambiar
cantidades, eliminar productos, vaciar el carrito y obtener su contenido.
El carrito pertenece al navegador (cookie), no a la cuenta.
"""

from fastapi import APIRouter, Depends
from typing import Optional
import logging

from haatbazar.api import deps
from haatbazar.schemas.cart_schema import Cart, CartItemCreate, CartItemUpdate
from haatbazar.schemas.notice_schema import Notice
from haatbazar.services.cart_service import CartService
from haatbazar.services.product_service import ProductService

logger = logging.getLogger(__name__)

# Router para el carrito de compras
router = APIRouter()

def _cart_response(cart_service: CartService, notice: Optional[Notice] = None) -> Cart:
    return Cart(
        items=cart_service.items,
        total_price=cart_service.get_cart_total(),
        items_count=cart_service.get_cart_items_count(),
        notice=notice,
    )

@router.get("/", response_model=Cart)
async def get_cart(cart_service: CartService = Depends(deps.get_cart_service)):
    """
    Obtiene el contenido del carrito con su total y número de unidades.
    """
    return _cart_response(cart_service)

@router.post("/items", status_code=201, response_model=Cart)
async def add_item_to_cart(
    item: CartItemCreate,
    cart_service: CartService = Depends(deps.get_cart_service),
    product_service: ProductService = Depends(deps.get_product_service),
):
    """
    Añade un producto al carrito. El stock lo valida el backend, no este endpoint.
    """
    product = await product_service.get_product(item.product_id)
    await cart_service.add_to_cart(product, item.quantity)
    return _cart_response(cart_service, Notice.success("Added to cart successfully!"))

@router.put("/items/{product_id}", response_model=Cart)
async def update_item_quantity(
    product_id: str,
    item: CartItemUpdate,
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Cambia la cantidad de un producto. Las cantidades no positivas se ignoran.
    """
    await cart_service.update_quantity(product_id, item.quantity)
    return _cart_response(cart_service)

@router.delete("/items/{product_id}", response_model=Cart)
async def remove_item_from_cart(
    product_id: str,
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Elimina un producto del carrito.
    """
    await cart_service.remove_from_cart(product_id)
    return _cart_response(cart_service)

@router.delete("/", status_code=204)
async def clear_cart(cart_service: CartService = Depends(deps.get_cart_service)):
    """
    Vacía completamente el carrito.
    """
    await cart_service.clear_cart()
    return
