# backend/haatbazar/schemas/cart_schema.py
"""
Esquemas Pydantic para la gestión del carrito de la compra.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .notice_schema import Notice


class LineItem(BaseModel):
    """
    Un producto dentro del carrito.

    Los datos de presentación y el precio se copian del producto al añadirlo
    y no se vuelven a consultar. Se serializa con claves camelCase, que es el
    formato del snapshot persistido.
    """
    product_id: str = Field(..., alias="productId")
    name: str
    image: Optional[str] = None
    unit: Optional[str] = None
    price: float
    quantity: int = Field(..., gt=0)
    total: float
    seller_id: Optional[str] = Field(None, alias="sellerId")

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)


class CartItemCreate(BaseModel):
    """Esquema para añadir un item al carrito."""
    product_id: str
    quantity: int = Field(1, gt=0)


class CartItemUpdate(BaseModel):
    """Nueva cantidad para un item; los valores no positivos se ignoran."""
    quantity: int


class Cart(BaseModel):
    """Esquema que representa el estado completo del carrito."""
    items: List[LineItem]
    total_price: float
    items_count: int
    notice: Optional[Notice] = None
