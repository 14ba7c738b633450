# backend/haatbazar/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por página del storefront
from haatbazar.api.v1.endpoints import (
    products,
    cart,
    checkout,
    auth,
    buyer
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS
# ========================================

# ROUTER DE PRODUCTOS
# Listado con filtros y detalle, leídos del backend
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DEL CARRITO
# Carrito por navegador, persistido tras cada cambio
api_router_v1.include_router(
    cart.router,
    prefix="/cart",
    tags=["Cart"]
)

# ROUTER DE CHECKOUT
# Agrupación por vendedor y pago simulado
api_router_v1.include_router(
    checkout.router,
    prefix="/checkout",
    tags=["Checkout"]
)

# ROUTER DE AUTENTICACIÓN
api_router_v1.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"]
)

# ROUTER DEL COMPRADOR
# Perfil, historial, quejas y reseñas
api_router_v1.include_router(
    buyer.router,
    prefix="/buyer",
    tags=["Buyer"]
)
