# backend/haatbazar/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa el storefront de HaatBazar: logging,
registro de routers, manejadores de errores y eventos del ciclo de vida.

Ningún fallo del backend ni de validación debe tumbar la aplicación: los
manejadores de excepciones convierten cada error en una respuesta con un
aviso para el usuario.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from haatbazar.core.config import settings  # Configuración centralizada de la aplicación
from haatbazar.core.exceptions import StorefrontError
from haatbazar.api.deps import set_browser_cookie
from haatbazar.api.v1.api_router import api_router_v1  # Router principal de la API v1
from haatbazar.db.redis_client import close_redis_client
from haatbazar.schemas.notice_schema import Notice

# ========================================
# CONFIGURACIÓN DE LOGGING
# ========================================

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="Storefront de HaatBazar: catálogo, carrito, checkout y cuenta del comprador"
)

app.include_router(api_router_v1, prefix=settings.API_V1_STR)

# ========================================
# MANEJO DE ERRORES
# ========================================

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    """
    Convierte errores de validación y del backend en un aviso para el usuario.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.message}")
    response = JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "notice": Notice.error(exc.message).model_dump(mode="json")},
    )
    # Primera visita que termina en error: el navegador conserva su identificador
    new_browser_id = getattr(request.state, "new_browser_id", None)
    if new_browser_id:
        set_browser_cookie(response, new_browser_id, settings)
    return response

# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    logger.info(f"Storefront iniciado; backend en {settings.BACKEND_API_URL}, carrito en '{settings.CART_STORAGE}'")

@app.on_event("shutdown")
async def shutdown_event():
    await close_redis_client()
