# backend/haatbazar/api/v1/endpoints/products.py

"""
Endpoints de consulta del catálogo de productos.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import logging

from haatbazar.api import deps
from haatbazar.schemas.product_schema import ProductFilters, ProductResponse
from haatbazar.services.product_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[ProductResponse], response_model_by_alias=True)
async def list_products(
    search: Optional[str] = Query(None, description="Texto a buscar en nombre o descripción"),
    category: Optional[str] = Query(None, description="Categoría ('all' para todas)"),
    division: Optional[str] = Query(None, description="División ('all' para todas)"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    product_service: ProductService = Depends(deps.get_product_service),
):
    """Lista los productos del backend aplicando los filtros de la página."""
    filters = ProductFilters(
        search=search,
        category=category,
        division=division,
        min_price=min_price,
        max_price=max_price,
    )
    return await product_service.list_products(filters)


@router.get("/{product_id}", response_model=ProductResponse, response_model_by_alias=True)
async def read_product(
    product_id: str,
    product_service: ProductService = Depends(deps.get_product_service),
):
    """Obtiene el detalle de un producto."""
    return await product_service.get_product(product_id)
