# backend/haatbazar/core/exceptions.py
"""
Excepciones de negocio del storefront.

Los errores de validación se detectan antes de cualquier llamada de red y
llegan al usuario como avisos; los errores del backend se capturan en el
endpoint que inició la llamada y nunca tumban la aplicación.
"""

from typing import Optional


class StorefrontError(Exception):
    """Error base de la aplicación, con mensaje apto para mostrar al usuario."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CheckoutValidationError(StorefrontError):
    """Datos de checkout incompletos (p. ej. dirección de envío vacía)."""


class AccountValidationError(StorefrontError):
    """Formularios de cuenta inválidos: contraseñas distintas, reseña vacía, etc."""


class NotAuthenticatedError(StorefrontError):
    """No hay usuario en la sesión del navegador."""

    status_code = 401

    def __init__(self, message: str = "Please log in to continue"):
        super().__init__(message)


class BackendAPIError(StorefrontError):
    """
    Fallo al hablar con el backend REST: error de red o respuesta no 2xx.

    `status_code` conserva el código del backend cuando lo hubo; los fallos de
    transporte se reportan como 502.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.backend_status = status_code
        self.status_code = status_code if status_code and 400 <= status_code < 500 else 502
