# backend/haatbazar/services/product_service.py
"""
Capa de servicios para el catálogo de productos.

El catálogo pertenece al backend; aquí solo se consulta y se filtra para las
páginas de productos (búsqueda por texto, categoría, división y rango de
precio), igual que hace la página de productos del storefront.
"""

import logging
from typing import List

from pydantic import ValidationError

from haatbazar.core.exceptions import BackendAPIError
from haatbazar.schemas.product_schema import ProductFilters, ProductResponse
from haatbazar.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

ALL = "all"

def matches_filters(product: ProductResponse, filters: ProductFilters) -> bool:
    """Indica si un producto pasa todos los filtros activos."""
    if filters.search:
        needle = filters.search.lower()
        in_name = needle in product.name.lower()
        in_description = needle in (product.description or "").lower()
        if not in_name and not in_description:
            return False

    if filters.category and filters.category != ALL and product.category != filters.category:
        return False

    if filters.division and filters.division != ALL and product.division != filters.division:
        return False

    if filters.min_price is not None and product.price_per_unit < filters.min_price:
        return False

    if filters.max_price is not None and product.price_per_unit > filters.max_price:
        return False

    return True


class ProductService:
    """
    Servicio para consultar productos del backend.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_products(self, filters: ProductFilters) -> List[ProductResponse]:
        """Lista el catálogo y aplica los filtros de la página de productos."""
        raw_products = await self.backend.get_products()
        products = []
        for raw in raw_products or []:
            try:
                products.append(ProductResponse.model_validate(raw))
            except ValidationError:
                logger.warning(f"Producto con formato inesperado ignorado: {raw.get('_id') if isinstance(raw, dict) else raw!r}")
        return [product for product in products if matches_filters(product, filters)]

    async def get_product(self, product_id: str) -> ProductResponse:
        """Obtiene un producto por su ID."""
        raw = await self.backend.get_product(product_id)
        try:
            return ProductResponse.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Producto {product_id} con formato inválido: {e.error_count()} errores")
            raise BackendAPIError("Product not found") from e
