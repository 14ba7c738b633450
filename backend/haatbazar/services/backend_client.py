# backend/haatbazar/services/backend_client.py
"""
Cliente del backend REST de HaatBazar.

Toda la lógica de negocio (catálogo, pedidos, cuentas, quejas, reseñas) vive
en un backend externo. Este módulo es la única puerta hacia él: envuelve
`httpx.AsyncClient`, y convierte errores de red y respuestas no 2xx en
`BackendAPIError` con el mensaje del backend cuando lo hay.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from haatbazar.core.config import settings
from haatbazar.core.exceptions import BackendAPIError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong"


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Devuelve el campo `error` o `message` del cuerpo JSON, o el texto por defecto."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return fallback


class BackendClient:
    """
    Cliente asíncrono para el backend REST.

    Se le puede inyectar un `httpx.AsyncClient` ya construido (los tests usan
    `httpx.MockTransport`); si no, crea uno con la URL base de la configuración.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, base_url: Optional[str] = None):
        headers = {"Accept": "application/json"}
        if settings.BACKEND_API_TOKEN:
            headers["Authorization"] = f"Bearer {settings.BACKEND_API_TOKEN}"
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.BACKEND_API_URL,
            timeout=settings.BACKEND_TIMEOUT,
            headers=headers,
        )

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, fallback: str = DEFAULT_ERROR_MESSAGE, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Error de red en {method} {path}: {e}")
            raise BackendAPIError(fallback) from e

        if response.is_error:
            message = extract_error_message(response, fallback)
            logger.warning(f"Backend respondió {response.status_code} en {method} {path}: {message}")
            raise BackendAPIError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Respuesta no JSON en {method} {path}")
            raise BackendAPIError(fallback, status_code=response.status_code) from e

    # ========================================
    # PRODUCTOS
    # ========================================

    async def get_products(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/products", fallback="Failed to fetch products")

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/products/{product_id}", fallback="Product not found")

    # ========================================
    # PEDIDOS Y TRANSACCIONES
    # ========================================

    async def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/orders", json=order_data, fallback="Failed to place order")

    async def update_order(self, order_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/orders/{order_id}", json=data, fallback="Failed to update order")

    async def create_transaction(self, transaction_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/transactions", json=transaction_data, fallback="Payment failed")

    # ========================================
    # AUTENTICACIÓN
    # ========================================

    async def login(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/login", json=data, fallback="Invalid email or password")

    async def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/register", json=data, fallback="Registration failed")

    async def verify_phone(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/verify-phone", json=data, fallback="Phone number not found")

    async def reset_password(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/reset-password", json=data, fallback="Failed to reset password")

    # ========================================
    # COMPRADOR
    # ========================================

    async def update_buyer(self, buyer_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/buyers/{buyer_id}", data=data, fallback="Failed to update profile")

    async def get_buyer_orders(self, buyer_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/buyers/{buyer_id}/orders", fallback="Failed to fetch orders")

    async def get_buyer_reviews(self, buyer_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/buyers/{buyer_id}/reviews", fallback="Failed to fetch reviews")

    async def update_review(self, review_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/reviews/{review_id}", data=data, fallback="Failed to update review")

    async def delete_review(self, review_id: str) -> None:
        await self._request("DELETE", f"/reviews/{review_id}", fallback="Failed to delete review")

    async def get_buyer_complaints(self, buyer_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/complaints/buyer/{buyer_id}", fallback="Failed to fetch complaints")

    async def create_complaint(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/complaints", data=data, fallback="Failed to submit complaint")

    async def get_sellers(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/sellers", fallback="Failed to fetch sellers")
