# backend/haatbazar/schemas/product_schema.py
"""
Esquemas Pydantic para los productos que devuelve el backend.

El backend usa `_id` como identificador y puede devolver `seller_id` como
identificador simple o como objeto de vendedor ya poblado.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


def normalize_seller_id(value: Any) -> Optional[str]:
    """
    Reduce `seller_id` a su identificador simple.

    Acepta un identificador o un objeto de vendedor poblado (`_id` o `id`).
    Devuelve None si no hay vendedor.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("_id") or value.get("id")
        if value is None:
            return None
    value = str(value).strip()
    return value or None


class ProductResponse(BaseModel):
    """Producto tal como lo expone `GET /products` y `GET /products/:id`."""
    id: str = Field(..., alias="_id")
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    price_per_unit: float
    unit: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    division: Optional[str] = None
    seller_id: Optional[Any] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProductFilters(BaseModel):
    """Filtros de la página de productos, aplicados sobre el listado completo."""
    search: Optional[str] = None
    category: Optional[str] = None
    division: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
