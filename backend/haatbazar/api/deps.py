# backend/haatbazar/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API. El carrito no es un estado global: cada petición
construye su CartService a partir del repositorio de su navegador, y todas
las mutaciones pasan por sus métodos públicos.
"""

import uuid
from typing import AsyncGenerator

from fastapi import Depends, Request, Response

from haatbazar.core.config import Settings, settings
from haatbazar.core.exceptions import NotAuthenticatedError
from haatbazar.crud.cart_crud import CartRepository, InMemoryCartRepository, RedisCartRepository
from haatbazar.crud.session_crud import InMemorySessionRepository, RedisSessionRepository, SessionRepository
from haatbazar.db.redis_client import get_redis_client
from haatbazar.schemas.user_schema import SessionUser
from haatbazar.services.auth_service import AuthService
from haatbazar.services.backend_client import BackendClient
from haatbazar.services.buyer_service import BuyerService
from haatbazar.services.cart_service import CartService
from haatbazar.services.payment_service import PaymentService
from haatbazar.services.product_service import ProductService


def get_settings() -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings


def set_browser_cookie(response: Response, browser_id: str, settings: Settings):
    response.set_cookie(
        settings.BROWSER_COOKIE_NAME,
        browser_id,
        max_age=settings.BROWSER_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


def get_browser_id(request: Request, response: Response, settings: Settings = Depends(get_settings)) -> str:
    """
    Identificador del navegador, leído de su cookie o asignado en la primera visita.

    Un identificador nuevo queda también en `request.state` para que las
    respuestas de error puedan enviar la cookie.
    """
    browser_id = request.cookies.get(settings.BROWSER_COOKIE_NAME)
    if not browser_id:
        browser_id = uuid.uuid4().hex
        set_browser_cookie(response, browser_id, settings)
        request.state.new_browser_id = browser_id
    return browser_id


def get_cart_repository(browser_id: str = Depends(get_browser_id), settings: Settings = Depends(get_settings)) -> CartRepository:
    if settings.CART_STORAGE == "memory":
        return InMemoryCartRepository(browser_id)
    return RedisCartRepository(get_redis_client(), browser_id)


def get_session_repository(browser_id: str = Depends(get_browser_id), settings: Settings = Depends(get_settings)) -> SessionRepository:
    if settings.CART_STORAGE == "memory":
        return InMemorySessionRepository(browser_id)
    return RedisSessionRepository(get_redis_client(), browser_id)


async def get_backend_client() -> AsyncGenerator[BackendClient, None]:
    """
    Cliente del backend REST; se cierra siempre al terminar la petición.
    """
    client = BackendClient()
    try:
        yield client
    finally:
        await client.aclose()


async def get_cart_service(repository: CartRepository = Depends(get_cart_repository)) -> CartService:
    """
    Dependencia para obtener el servicio de carrito hidratado desde su snapshot.
    """
    return await CartService.load(repository)


def get_product_service(backend: BackendClient = Depends(get_backend_client)) -> ProductService:
    return ProductService(backend)


def get_auth_service(
    backend: BackendClient = Depends(get_backend_client),
    sessions: SessionRepository = Depends(get_session_repository),
    carts: CartRepository = Depends(get_cart_repository),
) -> AuthService:
    return AuthService(backend, sessions, carts)


async def get_current_user(sessions: SessionRepository = Depends(get_session_repository)) -> SessionUser:
    """
    Guarda de login: exige un usuario en la sesión del navegador.
    """
    user = await sessions.get_user()
    if user is None:
        raise NotAuthenticatedError()
    return user


def get_buyer_service(
    backend: BackendClient = Depends(get_backend_client),
    sessions: SessionRepository = Depends(get_session_repository),
    user: SessionUser = Depends(get_current_user),
) -> BuyerService:
    return BuyerService(backend, sessions, user)


def get_payment_service(
    backend: BackendClient = Depends(get_backend_client),
    cart_service: CartService = Depends(get_cart_service),
) -> PaymentService:
    return PaymentService(backend, cart_service)
